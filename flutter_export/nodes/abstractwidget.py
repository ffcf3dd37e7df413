"""Base class for nodes that export as their own widget file."""

from typing import Dict, List, Optional

from .. import nodeutils
from ..base import get_string
from ..parameter import Parameter
from .abstractnode import AbstractNode

MATERIAL_IMPORT = 'package:flutter/material.dart'


class AbstractWidget(AbstractNode):

    def __init__(self, source, ctx):
        super().__init__(source, ctx)
        self.child_parameters: Dict[str, Parameter] = {}
        self._widget_prefix = ctx.widget_prefix

    @property
    def widget_name(self) -> str:
        return self.props.widget_name or nodeutils.get_default_widget_name(self.source, self._widget_prefix)

    @property
    def file_name(self) -> str:
        return f"{self.widget_name}.dart"

    @property
    def definition(self) -> Optional['AbstractWidget']:
        """The widget whose file declares this widget's class."""
        return self

    def add_child_param(self, param: Parameter, ctx, source=None) -> None:
        """Expose a named parameter from this widget's subtree on its constructor."""
        existing = self.child_parameters.get(param.name)
        if existing is not None and (existing.type != param.type or existing.value != param.value):
            ctx.log.warn(f"Duplicate parameter name '{param.name}' on widget '{self.widget_name}'.", source)
            return
        self.child_parameters[param.name] = param

    def _get_param_list(self, ctx) -> str:
        """Arguments for a call to this widget, only the ones differing from the declared defaults."""
        definition = self.definition
        if definition is None or definition is self:
            return ''
        result = ''
        for name, param in self.child_parameters.items():
            declared = definition.child_parameters.get(name)
            if declared is None or param.value is None or declared.value == param.value:
                continue
            result += f"{name}: {param.value}, "
        return result

    def _serialize_widget_body(self, ctx) -> str:
        return ''

    def serialize_widget(self, ctx) -> str:
        """The full Dart source for this widget's file."""
        ctx.push_imports()
        try:
            body = self._serialize_widget_body(ctx)
        finally:
            imports = ctx.pop_imports()

        name = self.widget_name
        extends = self.props.custom_extends
        params = list(self.child_parameters.values())

        fields = ''.join(f"final {p.type.value if p.type else 'dynamic'} {p.name};\n" for p in params)
        args = ''.join(self._get_constructor_arg(p) for p in params)
        if extends:
            body_str = f" : super(key: key, {body});"
        else:
            body_str = (" : super(key: key);\n"
                        "@override\n"
                        f"Widget build(BuildContext context) {{ return {body}; }}")

        return (f"{self._get_import_list(imports)}\n"
                f"class {name} extends {extends or 'StatelessWidget'} {{\n"
                f"{fields}"
                f"{name}({{Key? key, {args}}}){body_str}\n"
                "}\n")

    def _get_constructor_arg(self, param: Parameter) -> str:
        if param.value is None:
            required = '' if (param.type is None or param.type.nullable) else 'required '
            return f"{required}this.{param.name}, "
        return f"this.{param.name} = {param.value}, "

    def _get_import_list(self, imports: List[str]) -> str:
        own = f"./{self.file_name}"
        result = f"import {get_string(MATERIAL_IMPORT)};\n"
        for path in imports:
            if path == own or path == MATERIAL_IMPORT:
                continue
            path, _, alias = path.partition(' as ')
            result += f"import {get_string(path)}{' as ' + alias if alias else ''};\n"
        return result
