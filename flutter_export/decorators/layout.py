"""
Positions a node inside its parent.

Every node gets a Layout at construction. It is applied after all other
decorators, and can be cleared (`node.layout = None`) to emit the node
without positioning, as clipboard copies and flattened grid items are.
"""

from ..base import fix
from .abstractdecorator import AbstractDecorator

PINNED_IMPORT = 'package:adobe_xd/pinned.dart'


class Layout(AbstractDecorator):

    def _serialize(self, node_str, ctx):
        node = self.node
        parent = node.parent
        if parent is None or node.props.custom_slot:
            return node_str

        bounds = node.adjusted_bounds
        if parent.is_repeat_grid:
            return self._sized_box(node_str, bounds)
        if node.responsive:
            return self._pinned(node_str, bounds, parent.adjusted_bounds, ctx)
        return (f"Transform.translate(offset: Offset({fix(bounds['x'])}, {fix(bounds['y'])}), "
                f"child: {self._sized_box(node_str, bounds)}, )")

    def _sized_box(self, node_str, bounds):
        return f"SizedBox(width: {fix(bounds['width'])}, height: {fix(bounds['height'])}, child: {node_str}, )"

    def _pinned(self, node_str, bounds, parent_bounds, ctx):
        constraints = self.node.source.get('constraints') or {}
        h_pin = _get_pin(constraints.get('horizontal', 'LEFT'), bounds['x'], bounds['width'], parent_bounds['width'])
        v_pin = _get_pin(constraints.get('vertical', 'TOP'), bounds['y'], bounds['height'], parent_bounds['height'])
        ctx.add_import(PINNED_IMPORT)
        return f"Pinned.fromPins({h_pin}, {v_pin}, child: {node_str}, )"


def _get_pin(constraint, start, size, parent_size):
    """Dart Pin for one axis of a constraint (LEFT/TOP, RIGHT/BOTTOM, ...)."""
    end = parent_size - start - size
    if constraint in ('RIGHT', 'BOTTOM', 'MAX'):
        return f"Pin(size: {fix(size)}, end: {fix(end)})"
    if constraint in ('LEFT_RIGHT', 'TOP_BOTTOM', 'STRETCH'):
        return f"Pin(start: {fix(start)}, end: {fix(end)})"
    if constraint == 'CENTER':
        free = parent_size - size
        middle = start / free if free else 0.5
        return f"Pin(size: {fix(size)}, middle: {fix(middle, 4)})"
    if constraint == 'SCALE':
        if not parent_size:
            return f"Pin(start: {fix(start)}, end: {fix(end)})"
        return f"Pin(startFraction: {fix(start / parent_size, 4)}, endFraction: {fix(end / parent_size, 4)})"
    return f"Pin(size: {fix(size)}, start: {fix(start)})"
