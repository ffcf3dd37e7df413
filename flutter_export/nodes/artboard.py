"""Artboards: top level screens, exported as widgets built on a Scaffold."""

from .. import nodeutils
from ..base import get_color, get_fill
from .abstractwidget import AbstractWidget


class Artboard(AbstractWidget):

    @classmethod
    def create(cls, source, ctx):
        if source.get('type') == 'ARTBOARD':
            return cls(source, ctx)
        return None

    def _serialize(self, ctx):
        return f"{self.widget_name}({self._get_param_list(ctx)})"

    @property
    def adjusted_bounds(self):
        # position in the document is meaningless inside the widget
        size = nodeutils.get_local_size(self.source)
        return {'x': 0, 'y': 0, 'width': size['width'], 'height': size['height']}

    def _serialize_widget_body(self, ctx):
        children = self._get_child_stack(ctx, exclude_slots=True)
        slots = self._get_slots_str(ctx)

        extends = self.props.custom_extends
        if extends:
            background = self._get_background_color_param(ctx) if extends != 'Drawer' else ''
            return f"{background} {children} {slots}"

        name = self._get_custom_widget_name(ctx, 'Scaffold')
        body = f"body: {children}, " if children else ''
        return f"{name}({self._get_background_color_param(ctx)} {body} {slots})"

    def _get_background_color_param(self, ctx) -> str:
        fill = get_fill(self.source)
        color = None
        if fill and fill.type == 'SOLID':
            color = fill.color
        elif fill:
            ctx.log.warn("Only solid color backgrounds are supported for artboards.", self.source)
            if fill.gradient and fill.gradient.stops:
                color = fill.gradient.stops[0].color
        return f"backgroundColor: {get_color(color)}, " if color else ''
