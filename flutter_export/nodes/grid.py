"""
Repeat grids.

A repeat grid holds N rows built from one template. Text content and image
fills can differ between rows, so the grid walks the template item against
every row, turns each differing field into a parameter and emits the item
once, mapped over a list of per-row values. Fills with a color parameter name
are always carried per row.
"""

from typing import Dict, Any, List, Optional, Callable

from .. import nodetype, nodeutils
from ..base import fix, get_color, get_fill, get_string
from .abstractnode import AbstractNode


class Grid(AbstractNode):
    is_repeat_grid = True

    @classmethod
    def create(cls, source, ctx):
        if nodetype.get_type(source) == nodetype.REPEATGRID:
            return cls(source, ctx)
        return None

    def __init__(self, source, ctx):
        super().__init__(source, ctx)
        self.item: Optional[AbstractNode] = None

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return nodeutils.get_children(self.source)

    def _serialize(self, ctx):
        source, item = self.source, self.item
        rows = self.rows
        if item is None or not rows:
            ctx.log.error("Repeat grid has no children.", source)
            return ''
        if not item.children:
            ctx.log.warn("Repeat grid item is empty.", source)
            return ''
        padding_x, padding_y = source.get('paddingX', 0), source.get('paddingY', 0)
        if padding_x < 0 or padding_y < 0:
            ctx.log.warn("Negative grid spacing is not supported.", source)

        item_is_responsive = self._item_is_responsive()
        if item_is_responsive:
            # drop the wrapper group and its positioning
            item = item.children[0]
            item.layout = None

        params = self._get_params(ctx)
        row_data = [''] * len(rows)
        param_vars = ''
        for name, values in params.items():
            param_vars += f"final {name} = map['{name}'];\n"
            for i, value in enumerate(values):
                row_data[i] += f"'{name}': {value}, "
        row_data_str = ', '.join(f"{{{data}}}" for data in row_data)
        item_str = item.serialize(ctx)

        x_spacing, y_spacing = max(0, padding_x), max(0, padding_y)
        cell = source.get('cellSize') or {}
        cell_w, cell_h = cell.get('width', 0), cell.get('height', 0)
        width = nodeutils.get_local_size(source)['width']

        children = self.props.custom_children or 'children'
        mapped = f"[{row_data_str}].map((map) {{ {param_vars} return {item_str}; }}).toList()"

        if self.props.is_no_layout:
            return f"...{mapped}"

        if not item_is_responsive:
            name = self._get_custom_widget_name(ctx, 'SingleChildScrollView')
            return (f"{name}(child: Wrap("
                    "alignment: WrapAlignment.center, "
                    f"spacing: {fix(x_spacing)}, runSpacing: {fix(y_spacing)}, "
                    f"{children}: {mapped}, "
                    "), )")

        cols = (width + x_spacing / 2) / (cell_w + x_spacing) if cell_w + x_spacing else 1
        col_count = max(1, int(round(cols)))
        if abs(cols - col_count) > 0.15:
            ctx.log.warn("Partial columns are not supported in repeat grids.", source)
        aspect_ratio = fix(cell_w / cell_h, 2) if cell_h else '1.0'

        return ("GridView.count("
                f"mainAxisSpacing: {fix(y_spacing)}, crossAxisSpacing: {fix(x_spacing)}, "
                f"crossAxisCount: {col_count}, "
                f"childAspectRatio: {aspect_ratio}, "
                f"{children}: {mapped}, "
                ")")

    def _item_is_responsive(self) -> bool:
        """True when the item is a wrapper around one group whose children are responsive."""
        item = self.item
        if item is None or len(item.children) != 1:
            return False
        inner = item.children[0]
        return bool(inner.children) and inner.children[0].responsive

    # ------------------------------------------------------------------
    # Diff
    # ------------------------------------------------------------------

    def _get_params(self, ctx) -> Dict[str, List[str]]:
        params: Dict[str, List[str]] = {}
        self._diff(self.item, list(self.rows), params, ctx)
        return params

    def _diff(self, node: Optional[AbstractNode], sources: List[Optional[Dict[str, Any]]],
              params: Dict[str, List[str]], ctx) -> None:
        if node is None or not sources:
            return
        template = node.source
        node_type = template.get('type')

        if node_type == 'TEXT':
            override = node.props.text_param_name
            name = override or self._get_name(params, 'text')
            if self._diff_field(params, sources, name, _get_text, bool(override), ctx):
                node.add_param('text', name)
            self._diff_color(node, sources, params, ctx)
        elif node_type in nodetype.BOX_SHAPE_TYPES and nodeutils.has_image_fill(template):
            override = node.props.image_param_name
            name = override or self._get_name(params, 'image')
            if self._diff_field(params, sources, name, _get_image, bool(override), ctx):
                node.add_param('fill', name)
        elif node_type in nodetype.BOX_SHAPE_TYPES:
            self._diff_color(node, sources, params, ctx)

        template_children = nodeutils.get_children(template)
        for child in node.children:
            index = _index_of(template_children, child.source)
            self._diff(child, [nodeutils.child_at(s, index) for s in sources], params, ctx)

    def _diff_color(self, node: AbstractNode, sources: List[Optional[Dict[str, Any]]],
                    params: Dict[str, List[str]], ctx) -> None:
        name = node.props.color_param_name
        if name and node.get_param('color') is not None:
            self._diff_field(params, sources, name, _get_color, True, ctx)
            node.add_param('color', name)

    def _get_name(self, params: Dict[str, List[str]], name: str) -> str:
        count, result = 0, name
        while result in params:
            result = f"{name}_{count}"
            count += 1
        return result

    def _diff_field(self, params: Dict[str, List[str]], sources: List[Optional[Dict[str, Any]]], name: str,
                    get_value: Callable, force: bool, ctx) -> bool:
        first = get_value(sources[0], ctx)
        values = [get_value(source, ctx) for source in sources]
        differs = force or any(value != first for value in values)
        if differs:
            params[name] = values
        return differs


def _index_of(children: List[Dict[str, Any]], source: Dict[str, Any]) -> int:
    for i, child in enumerate(children):
        if child is source:
            return i
    return -1


def _get_text(source: Optional[Dict[str, Any]], ctx) -> str:
    return get_string(source.get('characters', '')) if source else 'null'


def _get_image(source: Optional[Dict[str, Any]], ctx) -> str:
    if not source:
        return 'null'
    ctx.add_image(source)
    return nodeutils.get_asset_image(source, ctx)


def _get_color(source: Optional[Dict[str, Any]], ctx) -> str:
    fill = get_fill(source) if source else None
    color = None
    if fill is not None and fill.type == 'SOLID':
        color = fill.color
    elif fill is not None and fill.gradient and fill.gradient.stops:
        color = fill.gradient.stops[0].color
    return get_color(color) if color else 'null'
