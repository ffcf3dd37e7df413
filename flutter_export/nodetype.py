"""Classification of design nodes into the semantic kinds the exporter handles."""

from typing import Dict, Any

TEXT = 'text'
GROUP = 'group'
REPEATGRID = 'repeatGrid'
WIDGET = 'widget'
SHAPE = 'shape'
ROOT = 'root'

GROUP_TYPES = frozenset({'GROUP', 'FRAME'})
WIDGET_TYPES = frozenset({'ARTBOARD', 'COMPONENT', 'INSTANCE'})
SHAPE_TYPES = frozenset({
    'RECTANGLE', 'ELLIPSE', 'VECTOR', 'BOOLEAN_OPERATION', 'LINE',
    'REGULAR_POLYGON', 'STAR',
})
BOX_SHAPE_TYPES = frozenset({'RECTANGLE', 'ELLIPSE'})


def get_type(node: Dict[str, Any]) -> str:
    """Map a source node to its kind. Unknown types fall back to ROOT."""
    node_type = node.get('type', '') if node else ''
    if node_type == 'TEXT':
        return TEXT
    if node_type in GROUP_TYPES:
        return GROUP
    if node_type == 'REPEAT_GRID':
        return REPEATGRID
    if node_type in WIDGET_TYPES:
        return WIDGET
    if node_type in SHAPE_TYPES:
        return SHAPE
    return ROOT


def get_label(node: Dict[str, Any]) -> str:
    """Human readable label, finer grained than get_type for widgets."""
    node_type = node.get('type', '') if node else ''
    if node_type == 'TEXT':
        return 'text'
    if node_type == 'REPEAT_GRID':
        return 'repeatGrid'
    if node_type in GROUP_TYPES:
        return 'group'
    if node_type == 'INSTANCE':
        return 'component'
    if node_type == 'COMPONENT':
        return 'master component'
    if node_type == 'ARTBOARD':
        return 'artboard'
    if node_type in SHAPE_TYPES:
        return 'shape'
    return 'none'
