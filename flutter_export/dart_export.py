"""
Export operations: copy one node, export one widget, export the project.

Each operation creates a fresh Context, parses the document and returns the
context, whose `result_message` and `log` describe the outcome. Problems with
the user's input go to `alert` and the operation returns None.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional

from . import nodeutils
from .base import (ColorValue, clean_class_name, clean_var_name, get_color, get_gradient,
                   get_gradient_type, parse_gradient)
from .context import Context, ContextTarget
from .formatter import DartFormatError, format_dart
from .nodes import AbstractWidget
from .nodes.text import get_text_style, get_text_style_param_list
from .parse import parse
from .project import Project, ProjectError, ProjectFolder
from .proptype import ProjectProps

logger = logging.getLogger(__name__)

Alert = Callable[[str], None]

FILE_HEADER = "import 'package:flutter/material.dart';\n\n"


def _log_alert(message: str) -> None:
    logger.warning(message)


def get_export_all_message(count: int, total: int, noun: str) -> str:
    plural = noun if total == 1 else f"{noun}s"
    if total == 0:
        return f"No {noun}s to export"
    if count == total:
        return f"Exported {total} {plural} successfully"
    return f"Exported {count} of {total} {plural}"


def copy_selected(selection: List[Dict[str, Any]], root: Dict[str, Any],
                  alert: Alert = _log_alert) -> Optional[Context]:
    """Dart code for the single selected node, in `ctx.output`."""
    source = nodeutils.get_selected_item(selection)
    if source is None:
        alert("Select a single item to copy.")
        return None
    if not nodeutils.is_copyable(source):
        alert("The selected item cannot be copied.")
        return None

    ctx = Context(ContextTarget.CLIPBOARD, ProjectProps.from_node(root))
    result = None
    node = parse(root, source, ctx)
    if node is not None:
        node.layout = None
        node_str = node.serialize(ctx)
        if node_str:
            result = _format_dart(node_str + ';', True, ctx, node)

    ctx.output = result
    ctx.result_message = "Flutter code copied to clipboard" if result else "Unable to export this node"
    return ctx


async def export_selected(selection: List[Dict[str, Any]], root: Dict[str, Any], project: Project,
                          alert: Alert = _log_alert) -> Optional[Context]:
    """Write the selected artboard or master component to the project."""
    source = nodeutils.get_selected_item(selection)
    if source is None:
        alert("Select an Artboard or Master Component.")
        return None
    if not nodeutils.is_widget(source):
        message = "Only Artboards and Master Components can be exported as Widgets."
        if source.get('type') == 'INSTANCE':
            message += " Export this instance's master component instead."
        alert(message)
        return None
    if not await project.check_root():
        alert("Set a Flutter project folder to export to.")
        return None

    ctx = Context(ContextTarget.FILES, ProjectProps.from_node(root))
    file_name = None
    node = parse(root, source, ctx)
    if isinstance(node, AbstractWidget):
        file_name = await write_widget(node, project.code, ctx)

    await project.validate(ctx)
    ctx.result_message = f"Exported '{file_name}' successfully" if file_name else "Widget export failed"
    return ctx


async def export_all(root: Dict[str, Any], project: Project,
                     alert: Alert = _log_alert) -> Optional[Context]:
    """Write every artboard and master component, then the color and text style classes."""
    if not await project.check_root():
        alert("Set a Flutter project folder to export to.")
        return None

    ctx = Context(ContextTarget.FILES, ProjectProps.from_node(root))
    parse(root, None, ctx)

    count = total = 0
    for widget in ctx.widgets.values():
        if not widget.props.include_in_export_project:
            continue
        total += 1
        if await write_widget(widget, project.code, ctx):
            count += 1

    await export_colors(root, project, ctx)
    await export_char_styles(root, project, ctx)
    await project.validate(ctx)

    ctx.result_message = get_export_all_message(count, total, "widget")
    return ctx


async def write_widget(node: AbstractWidget, folder: ProjectFolder, ctx: Context) -> Optional[str]:
    """Write one widget file. Returns its file name, or None when it couldn't be written."""
    file_str = _format_dart(node.serialize_widget(ctx), False, ctx, node)
    if not file_str:
        return None
    try:
        await folder.write_file(node.file_name, file_str, ctx)
    except ProjectError as e:
        logger.warning("Skipping %s: %s", node.file_name, e)
        return None
    return node.file_name


# ---------------------------------------------------------------------------
# Colors and character styles
# ---------------------------------------------------------------------------

def _get_assets(root: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    return (root.get('assets') or {}).get(key) or []


def serialize_colors(entries: List[Dict[str, Any]], class_name: str, ctx: Context) -> str:
    """
    Dart class of static color and gradient constants.

    Names ending in digits are also grouped into list constants
    (`blue0`, `blue1` -> `blue`) when at least indices 0 and 1 exist.
    """
    used, lists = set(), {}
    result = f"{FILE_HEADER}class {class_name} {{\n"
    for asset in entries:
        name = clean_var_name(asset.get('name'))
        if not name:
            continue
        if name in used:
            ctx.log.warn(f"Duplicate color asset name: {name}")
            continue
        used.add(name)

        gradient = parse_gradient(asset['gradient']) if asset.get('gradient') else None
        is_gradient = gradient is not None
        match = re.match(r'(.+?)(\d+)$', name)
        if match:
            group = lists.setdefault(match.group(1), {'is_gradient': is_gradient, 'names': {}})
            if group['is_gradient'] != is_gradient:
                ctx.log.warn(f"Color asset lists can't mix colors and gradients ({match.group(1)})")
            else:
                group['names'][int(match.group(2))] = name

        if is_gradient:
            result += f"static const {get_gradient_type(gradient)} {name} = {get_gradient(gradient)};\n"
        else:
            color = ColorValue.from_dict(asset.get('color') or {})
            result += f"static const Color {name} = {get_color(color)};\n"

    for list_name, group in lists.items():
        list_str = _get_color_list(list_name, group)
        if list_str:
            result += list_str + "\n"
    return result + "}\n"


def _get_color_list(name: str, group: Dict[str, Any]) -> str:
    names = group['names']
    if 0 not in names or 1 not in names:
        return ''
    items = []
    i = 0
    while i in names:
        items.append(names[i])
        i += 1
    list_type = 'Gradient' if group['is_gradient'] else 'Color'
    return f"static const List<{list_type}> {name} = const [{', '.join(items)}];"


def serialize_char_styles(entries: List[Dict[str, Any]], class_name: str, ctx: Context) -> str:
    """Dart class of static TextStyle constants."""
    used = set()
    result = f"{FILE_HEADER}class {class_name} {{\n"
    for asset in entries:
        name = clean_var_name(asset.get('name'))
        if not name:
            continue
        if name in used:
            ctx.log.warn(f"Duplicate character style asset name: {name}")
            continue
        used.add(name)
        color = get_color(ColorValue.from_dict(asset['color'])) if asset.get('color') else None
        style = get_text_style(get_text_style_param_list(asset.get('style') or {}, color))
        if style:
            result += f"static const TextStyle {name} = const {style};\n"
    return result + "}\n"


async def export_colors(root: Dict[str, Any], project: Project, ctx: Context) -> Optional[str]:
    props = ctx.project_props
    entries = _get_assets(root, 'colors')
    if not props.export_colors or not entries:
        return None
    class_name = clean_class_name(props.colors_class_name) or 'XDColors'
    return await _write_asset_class(serialize_colors(entries, class_name, ctx), class_name, project, ctx)


async def export_char_styles(root: Dict[str, Any], project: Project, ctx: Context) -> Optional[str]:
    props = ctx.project_props
    entries = _get_assets(root, 'characterStyles')
    if not props.export_char_styles or not entries:
        return None
    class_name = clean_class_name(props.char_styles_class_name) or 'XDTextStyles'
    return await _write_asset_class(serialize_char_styles(entries, class_name, ctx), class_name, project, ctx)


async def _write_asset_class(source: str, class_name: str, project: Project, ctx: Context) -> Optional[str]:
    file_str = _format_dart(source, False, ctx)
    if not file_str:
        return None
    file_name = f"{class_name}.dart"
    try:
        await project.code.write_file(file_name, file_str, ctx)
    except ProjectError as e:
        logger.warning("Skipping %s: %s", file_name, e)
        return None
    return file_name


def _format_dart(source: str, nest_in_function: bool, ctx: Context, node=None) -> Optional[str]:
    try:
        return format_dart(source, nest_in_function)
    except DartFormatError as e:
        logger.debug("Formatting failed", exc_info=True)
        ctx.log.error(source)
        ctx.log.error(f"Unable to format the exported source code: {e}", node.source if node else None)
        return None
