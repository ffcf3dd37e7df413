"""
Base class for export nodes.

An export node wraps one source node dict and knows how to serialize it to a
Dart expression. Subclasses implement `_serialize` and a `create(source, ctx)`
classmethod that returns an instance when the source node is of their kind.
"""

import logging
from functools import reduce
from typing import Dict, Any, List, Optional

from .. import nodeutils
from ..decorators import AbstractDecorator, Layout
from ..parameter import Parameter, ParamType
from ..proptype import NodeProps

logger = logging.getLogger(__name__)


class AbstractNode:
    is_repeat_grid = False

    @classmethod
    def create(cls, source: Dict[str, Any], ctx) -> Optional['AbstractNode']:
        return None

    def __init__(self, source: Dict[str, Any], ctx):
        self.source = source
        self.props = NodeProps.from_node(source)
        self.parameters: Dict[str, Parameter] = {}
        self.children: List['AbstractNode'] = []
        self.decorators: List[AbstractDecorator] = []
        self.has_decorators = False     # true once a non-cosmetic decorator is attached
        self.layout: Optional[Layout] = Layout(self, ctx)
        self.parent: Optional['AbstractNode'] = None
        self._cache = ''
        self._cached = False

        self.add_param('tap', self.props.tap_callback_name, ParamType.TAP)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.source_name!r} ({self.source_id})>"

    # ------------------------------------------------------------------
    # Source accessors
    # ------------------------------------------------------------------

    @property
    def source_id(self) -> Optional[str]:
        return self.source.get('id') if self.source else None

    @property
    def source_name(self) -> Optional[str]:
        return self.source.get('name') if self.source else None

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def responsive(self) -> bool:
        return bool(self.source.get('constraints'))

    @property
    def transform(self) -> Dict[str, Any]:
        return {'rotation': self.source.get('rotation') or 0}

    @property
    def adjusted_bounds(self) -> Dict[str, float]:
        """Unrotated bounds, with x/y relative to the parent's top left corner."""
        bounds = nodeutils.get_bounds(self.source)
        size = nodeutils.get_local_size(self.source)
        # the bounding box grows with rotation, its center doesn't move
        x = bounds['x'] + bounds['width'] / 2 - size['width'] / 2
        y = bounds['y'] + bounds['height'] / 2 - size['height'] / 2
        if self.parent is not None:
            parent_bounds = nodeutils.get_bounds(self.parent.source)
            x -= parent_bounds['x']
            y -= parent_bounds['y']
        return {'x': x, 'y': y, 'width': size['width'], 'height': size['height']}

    # ------------------------------------------------------------------
    # Decorators and parameters
    # ------------------------------------------------------------------

    def add_decorator(self, decorator: AbstractDecorator) -> None:
        self.decorators.append(decorator)
        if not decorator.cosmetic:
            self.has_decorators = True

    def add_param(self, key: str, name: Optional[str], type: Optional[ParamType] = None,
                  value: Optional[str] = None) -> Optional[Parameter]:
        if not name or not key:
            return None
        param = Parameter(name, type, value)
        self.parameters[key] = param
        return param

    def get_param(self, key: str) -> Optional[Parameter]:
        return self.parameters.get(key)

    def get_param_name(self, key: str) -> Optional[str]:
        param = self.get_param(key)
        return param.name if param else None

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(self, ctx) -> str:
        if not self._cached:
            try:
                self._cache = self._decorate(self._serialize(ctx), ctx)
            except Exception as e:
                logger.debug("Serialization of %r failed", self, exc_info=True)
                ctx.log.error(f"Unable to export this node: {e}", self.source)
                self._cache = ''
            self._cached = True
        return self._cache

    def _serialize(self, ctx) -> str:
        return ''

    def _decorate(self, node_str: str, ctx) -> str:
        if not node_str:
            return node_str
        node_str = reduce(lambda s, decorator: decorator.serialize(s, ctx), self.decorators, node_str)
        if self.layout is not None and not self.props.is_no_layout:
            node_str = self.layout.serialize(node_str, ctx)
        return node_str

    # ------------------------------------------------------------------
    # Children and slots
    # ------------------------------------------------------------------

    def _filter_child_list(self) -> List['AbstractNode']:
        return [node for node in self.children if node and not node.props.custom_slot]

    def _get_child_slots(self) -> List[str]:
        """Named slots used by the children, in first-seen order."""
        slots = []
        for node in self.children:
            slot = node.props.custom_slot if node else None
            if slot and slot not in slots:
                slots.append(slot)
        return slots

    def _get_child_list_in_slot(self, slot: str) -> List['AbstractNode']:
        return [node for node in self.children if node and node.props.custom_slot == slot]

    def _get_child_list(self, ctx) -> str:
        result = ''
        for node in self._filter_child_list():
            child_str = node.serialize(ctx)
            if child_str:
                result += child_str + ', '
        return result

    def _get_child_slot(self, ctx, slot: str) -> str:
        items = [s for s in (node.serialize(ctx) for node in self._get_child_list_in_slot(slot)) if s]
        if len(items) == 1:
            return items[0]
        return '[' + ','.join(items) + ']'

    def _get_slots_str(self, ctx) -> str:
        return ','.join(f"{slot}: {self._get_child_slot(ctx, slot)}" for slot in self._get_child_slots())

    def _get_child_stack(self, ctx, exclude_slots: bool = False) -> str:
        """
        The children as a container call: `Stack(children: <Widget>[...], slot: ...)`.

        The container and its children argument can be renamed through the
        node's settings. With `exclude_slots`, named slots are left out and an
        empty default list yields ''. A node that extends a custom class gets
        the bare arguments, to splice into its own constructor.
        """
        children = self.props.custom_children or 'children'

        child_list = self._get_child_list(ctx)
        children_str = f"{children}: <Widget>[{child_list}], " if child_list else ''
        if exclude_slots and not children_str:
            return ''

        slots_str = '' if exclude_slots else self._get_slots_str(ctx)
        if self.props.custom_extends:
            return f"{children_str} {slots_str}"
        return f"{self._get_custom_widget_name(ctx, 'Stack')}({children_str} {slots_str})"

    def _get_custom_widget_name(self, ctx, default: str) -> str:
        """The custom widget's class name, importing its package when one is given."""
        package = self.props.custom_widget_import
        if package:
            ctx.add_import(package)
        return self.props.custom_widget_name or default
