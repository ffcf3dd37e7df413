"""Master components and their instances."""

from typing import Optional

from .abstractwidget import AbstractWidget


class Component(AbstractWidget):
    """
    A master component exports as a widget whose body is its child stack.

    Anywhere else in the tree, masters and instances serialize as a call to
    the master's widget, passing only the parameters the instance overrides.
    """

    @classmethod
    def create(cls, source, ctx):
        if source.get('type') in ('COMPONENT', 'INSTANCE'):
            return cls(source, ctx)
        return None

    def __init__(self, source, ctx):
        super().__init__(source, ctx)
        self._masters = ctx.master_components

    @property
    def is_master(self) -> bool:
        return self.source.get('type') == 'COMPONENT'

    @property
    def symbol_id(self) -> Optional[str]:
        return self.source_id if self.is_master else self.source.get('componentId')

    @property
    def definition(self) -> Optional[AbstractWidget]:
        return self if self.is_master else self._masters.get(self.symbol_id)

    @property
    def widget_name(self) -> str:
        if self.is_master:
            return super().widget_name
        master = self.definition
        return master.widget_name if master else super().widget_name

    def _serialize(self, ctx):
        master = self.definition
        if master is None:
            ctx.log.warn("Unable to find the master component for this instance.", self.source)
            return ''
        ctx.add_import(f"./{master.file_name}")
        return f"{master.widget_name}({self._get_param_list(ctx)})"

    def _serialize_widget_body(self, ctx):
        return self._get_child_stack(ctx)
