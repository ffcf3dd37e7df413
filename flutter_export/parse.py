"""
Builds the export node tree from a source document.

The whole document is walked once so that every artboard and master
component is known before anything serializes (instances need their master).
"""

import logging
from typing import Dict, Any, List, Optional

from . import nodetype, nodeutils
from .decorators import DECORATORS
from .nodes import AbstractNode, AbstractWidget, Artboard, Component, Grid, Group, Shape, Text

logger = logging.getLogger(__name__)

NODE_CLASSES = {
    nodetype.TEXT: (Text,),
    nodetype.GROUP: (Group,),
    nodetype.REPEATGRID: (Grid,),
    nodetype.WIDGET: (Artboard, Component),
    nodetype.SHAPE: (Shape,),
}


class Parser:

    def __init__(self, ctx, target: Optional[Dict[str, Any]] = None):
        self.ctx = ctx
        self.target_id = target.get('id') if target else None
        self.result: Optional[AbstractNode] = None

    def parse(self, root: Dict[str, Any]) -> Optional[AbstractNode]:
        self._parse_node(root, None, None, False)
        return self.result

    def _parse_node(self, source: Dict[str, Any], parent: Optional[AbstractNode],
                    widget: Optional[AbstractWidget], in_grid: bool) -> List[AbstractNode]:
        """Build the node(s) for `source`. Root kinds are transparent and yield their children."""
        if not source or not nodeutils.is_visible(source):
            return []

        kind = nodetype.get_type(source)
        if kind == nodetype.ROOT:
            return self._parse_children(nodeutils.get_children(source), parent, widget, in_grid)

        node = self._create(kind, source)
        if node is None:
            logger.debug("No export node for %s (%s)", source.get('id'), source.get('type'))
            return []
        node.parent = parent
        if self.target_id is not None and source.get('id') == self.target_id:
            self.result = node

        if isinstance(node, Artboard):
            self.ctx.add_artboard(node)
        else:
            self._add_decorators(node)
            if isinstance(node, Component) and node.is_master:
                self.ctx.add_master_component(node)

        if widget is not None:
            for key, param in node.parameters.items():
                # grid rows share one tap callback, their other fields come from the grid diff
                if in_grid and key != 'tap':
                    continue
                widget.add_child_param(param, self.ctx, source)

        if isinstance(node, Grid):
            rows = nodeutils.get_children(source)
            items = self._parse_node(rows[0], node, widget, True) if rows else []
            node.item = items[0] if items else None
            node.children = items[:1]
        else:
            child_widget = node if isinstance(node, AbstractWidget) else widget
            child_in_grid = False if isinstance(node, AbstractWidget) else in_grid
            node.children = self._parse_children(nodeutils.get_children(source), node, child_widget, child_in_grid)
        return [node]

    def _parse_children(self, sources, parent, widget, in_grid) -> List[AbstractNode]:
        nodes = []
        for child in sources:
            nodes.extend(self._parse_node(child, parent, widget, in_grid))
        return nodes

    def _create(self, kind: str, source: Dict[str, Any]) -> Optional[AbstractNode]:
        for cls in NODE_CLASSES.get(kind, ()):
            node = cls.create(source, self.ctx)
            if node is not None:
                return node
        return None

    def _add_decorators(self, node: AbstractNode) -> None:
        for cls in DECORATORS:
            decorator = cls.create(node, self.ctx)
            if decorator is not None:
                node.add_decorator(decorator)


def parse(root: Dict[str, Any], target: Optional[Dict[str, Any]], ctx) -> Optional[AbstractNode]:
    """
    Parse the document under `root`, registering widgets on `ctx`.

    Returns the node built for `target`, or None when there is no target or
    it has no export node (invisible, or a root kind).
    """
    return Parser(ctx, target).parse(root)
