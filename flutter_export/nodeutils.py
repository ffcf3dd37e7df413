"""Read-only accessors over source node dicts."""

from typing import Dict, Any, List, Optional

from . import nodetype
from .base import get_fill, clean_class_name, clean_file_name
from .proptype import NodeProps


def get_children(node: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return (node.get('children') or []) if node else []


def child_at(node: Optional[Dict[str, Any]], index: int) -> Optional[Dict[str, Any]]:
    children = get_children(node)
    return children[index] if 0 <= index < len(children) else None


def is_visible(node: Dict[str, Any]) -> bool:
    return node.get('visible', True) is not False


def get_bounds(node: Dict[str, Any]) -> Dict[str, float]:
    bbox = node.get('absoluteBoundingBox') or {}
    return {
        'x': bbox.get('x', 0),
        'y': bbox.get('y', 0),
        'width': bbox.get('width', 0),
        'height': bbox.get('height', 0),
    }


def get_local_size(node: Dict[str, Any]) -> Dict[str, float]:
    """Unrotated size. Falls back to the bounding box when `size` is absent."""
    size = node.get('size')
    if size:
        return {'width': size.get('x', 0), 'height': size.get('y', 0)}
    bounds = get_bounds(node)
    return {'width': bounds['width'], 'height': bounds['height']}


def has_image_fill(node: Dict[str, Any]) -> bool:
    fill = get_fill(node)
    return bool(fill and fill.type == 'IMAGE')


def is_widget(node: Optional[Dict[str, Any]]) -> bool:
    """True for nodes that export as widget files: artboards and master components."""
    return bool(node) and node.get('type') in ('ARTBOARD', 'COMPONENT')


def is_copyable(node: Optional[Dict[str, Any]]) -> bool:
    kind = nodetype.get_type(node)
    return kind not in (nodetype.ROOT, nodetype.WIDGET)


def get_default_widget_name(node: Dict[str, Any], prefix: str = '') -> str:
    return prefix + (clean_class_name(node.get('name')) or 'Widget')


def get_image_name(node: Dict[str, Any]) -> str:
    props = NodeProps.from_node(node)
    if props.image_fill_name:
        return props.image_fill_name
    name = clean_file_name(node.get('name')) or 'image'
    fill = get_fill(node)
    if fill and fill.image_ref:
        name += '_' + fill.image_ref[:6]
    return name


def get_selected_item(selection: Optional[List[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    if not selection or len(selection) != 1:
        return None
    return selection[0]


def get_image_path(node: Dict[str, Any], ctx) -> str:
    return f"{ctx.image_path}/{get_image_name(node)}.png"


def get_asset_image(node: Dict[str, Any], ctx) -> str:
    return f"const AssetImage('{get_image_path(node, ctx)}')"
