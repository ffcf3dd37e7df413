#!/usr/bin/env python3
"""
Flutter Export MCP Server - Model Context Protocol server that turns designs into Flutter code.

This server provides tools to:
- Copy the Dart code of a single design node
- Export artboards and master components as widget files
- Export a whole document into a Flutter project, with color and text style classes
- Inspect the export settings stored on a node

Documents come from the Figma REST API (by file key) or from a local
scene graph JSON file.
"""

import json
import logging
import os
import re
import sys
from enum import Enum
from typing import Optional, List, Dict, Any

import httpx
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from mcp.server.fastmcp import FastMCP

from flutter_export import (
    Context, DocumentError, NodeProps, Project, ProjectError, ProjectProps,
    copy_selected, export_all, export_selected, find_node, from_figma_file, load_document, parse,
)
from flutter_export import nodetype
from flutter_export.context import ContextTarget
from flutter_export.nodes import AbstractWidget

# ============================================================================
# Constants
# ============================================================================

FIGMA_API_BASE = "https://api.figma.com/v1"
CHARACTER_LIMIT = 25000
DEFAULT_TIMEOUT = 30.0

logger = logging.getLogger("flutter_mcp")

# ============================================================================
# Initialize MCP Server
# ============================================================================

mcp = FastMCP("flutter_export_mcp")

# ============================================================================
# Enums and Types
# ============================================================================

class ResponseFormat(str, Enum):
    """Output format for tool responses."""
    MARKDOWN = "markdown"
    JSON = "json"


# ============================================================================
# Pydantic Input Models
# ============================================================================

class FlutterDocumentInput(BaseModel):
    """Input model for operations on a whole document."""
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    file_key: Optional[str] = Field(
        default=None,
        description="Figma file key (from URL: figma.com/design/FILE_KEY/...)",
        min_length=10,
        max_length=50
    )
    document_path: Optional[str] = Field(
        default=None,
        description="Path to a local scene graph JSON file (instead of file_key)",
        min_length=1
    )

    @field_validator('file_key')
    @classmethod
    def validate_file_key(cls, v: Optional[str]) -> Optional[str]:
        # Extract file key from URL if full URL provided
        if v and 'figma.com' in v:
            match = re.search(r'figma\.com/(?:design|file)/([a-zA-Z0-9]+)', v)
            if match:
                return match.group(1)
            raise ValueError("Could not extract file key from Figma URL")
        return v

    @model_validator(mode='after')
    def check_source(self) -> 'FlutterDocumentInput':
        if bool(self.file_key) == bool(self.document_path):
            raise ValueError("Provide exactly one of file_key or document_path")
        return self


class FlutterNodeInput(FlutterDocumentInput):
    """Input model for operations on one node."""

    node_id: str = Field(
        ...,
        description="Node ID (e.g., '1:2' or '1-2')",
        min_length=1
    )

    @field_validator('node_id')
    @classmethod
    def normalize_node_id(cls, v: str) -> str:
        # Convert 1-2 format to 1:2
        return v.replace('-', ':')


class FlutterExportInput(FlutterNodeInput):
    """Input model for exporting one widget."""

    project_path: Optional[str] = Field(
        default=None,
        description="Flutter project root. Defaults to the document's export path, then FLUTTER_PROJECT_PATH"
    )


class FlutterExportAllInput(FlutterDocumentInput):
    """Input model for exporting every widget of a document."""

    project_path: Optional[str] = Field(
        default=None,
        description="Flutter project root. Defaults to the document's export path, then FLUTTER_PROJECT_PATH"
    )


class FlutterNodeSettingsInput(FlutterNodeInput):
    """Input model for node settings inspection."""

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' or 'json'"
    )


# ============================================================================
# Shared Utilities
# ============================================================================

def _get_figma_token() -> str:
    """Get Figma API token from environment."""
    token = os.environ.get("FIGMA_ACCESS_TOKEN") or os.environ.get("FIGMA_TOKEN")
    if not token:
        raise ValueError(
            "Figma API token not found. Set FIGMA_ACCESS_TOKEN or FIGMA_TOKEN environment variable. "
            "Get your token from: https://www.figma.com/developers/api#access-tokens"
        )
    return token


async def _make_figma_request(
    endpoint: str,
    method: str = "GET",
    params: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Make authenticated request to Figma API."""
    token = _get_figma_token()

    async with httpx.AsyncClient() as client:
        response = await client.request(
            method=method,
            url=f"{FIGMA_API_BASE}/{endpoint}",
            headers={"X-Figma-Token": token},
            params=params,
            timeout=DEFAULT_TIMEOUT
        )
        response.raise_for_status()
        return response.json()


def _handle_api_error(e: Exception) -> str:
    """Format API and export errors for user-friendly messages."""
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        if status == 401:
            return "Error: Invalid Figma API token. Check your FIGMA_ACCESS_TOKEN environment variable."
        elif status == 403:
            return "Error: Access denied. You don't have permission to view this file."
        elif status == 404:
            return "Error: File not found. Check the file key."
        elif status == 429:
            return "Error: Rate limit exceeded. Please wait before making more requests."
        return f"Error: Figma API returned status {status}"
    elif isinstance(e, httpx.TimeoutException):
        return "Error: Request timed out. The file might be too large."
    elif isinstance(e, (DocumentError, ProjectError, ValueError)):
        return f"Error: {str(e)}"
    logger.exception("Unexpected error")
    return f"Error: {type(e).__name__}: {str(e)}"


async def _load_source(params: FlutterDocumentInput) -> Dict[str, Any]:
    """Scene graph root for the requested document."""
    if params.document_path:
        return load_document(params.document_path)
    data = await _make_figma_request(f"files/{params.file_key}", params={"plugin_data": "shared"})
    return from_figma_file(data)


def _get_project(root: Dict[str, Any], project_path: Optional[str]) -> Project:
    props = ProjectProps.from_node(root)
    path = project_path or props.export_path or os.environ.get("FLUTTER_PROJECT_PATH")
    return Project.from_props(props, path)


def _format_result(ctx: Context, code: Optional[str] = None) -> str:
    """Markdown summary of an export: message, code, diagnostics."""
    lines = [f"# {ctx.result_message}", ""]
    if code:
        lines.extend(["```dart", code.rstrip('\n'), "```", ""])
    if ctx.images:
        lines.extend(["## Image Assets", ""])
        lines.extend(f"- `{path}`" for path in ctx.image_files)
        lines.append("")
    if ctx.log.entries:
        lines.extend(["## Diagnostics", ""])
        for entry in ctx.log.entries:
            lines.append(f"- **{entry.level.title()}:** {entry}")
    result = "\n".join(lines)
    if len(result) > CHARACTER_LIMIT:
        return result[:CHARACTER_LIMIT] + "\n\n... (truncated)"
    return result


def _alert_error(alerts: List[str]) -> str:
    return "Error: " + (" ".join(alerts) or "The operation could not be completed.")


def _describe_node(source: Dict[str, Any], root: Dict[str, Any]) -> Dict[str, Any]:
    ctx = Context(ContextTarget.CLIPBOARD, ProjectProps.from_node(root))
    node = parse(root, source, ctx)
    details = {
        'id': source.get('id'),
        'name': source.get('name'),
        'type': source.get('type'),
        'kind': nodetype.get_type(source),
        'label': nodetype.get_label(source),
        'settings': NodeProps.from_node(source).model_dump(by_alias=True, exclude_none=True),
    }
    if node is None:
        return details
    details['decorators'] = [type(d).__name__ for d in node.decorators]
    details['hasLayout'] = node.layout is not None and not node.props.is_no_layout
    details['parameters'] = {
        key: {'name': p.name, 'type': p.type.value if p.type else None, 'value': p.value}
        for key, p in node.parameters.items()
    }
    if isinstance(node, AbstractWidget):
        details['widgetName'] = node.widget_name
        details['widgetParameters'] = {
            name: {'type': p.type.value if p.type else None, 'value': p.value}
            for name, p in node.child_parameters.items()
        }
    return details


# ============================================================================
# MCP Tools
# ============================================================================

@mcp.tool(
    name="flutter_copy_node",
    annotations={
        "title": "Copy Flutter Code for a Node",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    }
)
async def flutter_copy_node(params: FlutterNodeInput) -> str:
    """
    Generate the Flutter (Dart) code for a single design node.

    The node is emitted as one widget expression, without positioning, the
    way it would be pasted into an existing widget tree.

    Args:
        params: FlutterNodeInput containing:
            - file_key (str) or document_path (str): the document
            - node_id (str): Node ID (e.g., '1:2' or '1-2')

    Returns:
        str: Markdown with the Dart code and any export warnings
    """
    try:
        root = await _load_source(params)
        source = find_node(root, params.node_id)
        if source is None:
            return f"Error: Node '{params.node_id}' not found in document."

        alerts: List[str] = []
        ctx = copy_selected([source], root, alert=alerts.append)
        if ctx is None:
            return _alert_error(alerts)
        return _format_result(ctx, ctx.output)

    except Exception as e:
        return _handle_api_error(e)


@mcp.tool(
    name="flutter_export_widget",
    annotations={
        "title": "Export Flutter Widget",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    }
)
async def flutter_export_widget(params: FlutterExportInput) -> str:
    """
    Export one artboard or master component as a Dart widget file.

    The file is written to the project's code folder as `<WidgetName>.dart`.

    Args:
        params: FlutterExportInput containing:
            - file_key (str) or document_path (str): the document
            - node_id (str): ID of an artboard or master component
            - project_path (Optional[str]): Flutter project root

    Returns:
        str: Result message and export warnings
    """
    try:
        root = await _load_source(params)
        source = find_node(root, params.node_id)
        if source is None:
            return f"Error: Node '{params.node_id}' not found in document."

        alerts: List[str] = []
        ctx = await export_selected([source], root, _get_project(root, params.project_path), alert=alerts.append)
        if ctx is None:
            return _alert_error(alerts)
        return _format_result(ctx)

    except Exception as e:
        return _handle_api_error(e)


@mcp.tool(
    name="flutter_export_all",
    annotations={
        "title": "Export All Flutter Widgets",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    }
)
async def flutter_export_all(params: FlutterExportAllInput) -> str:
    """
    Export every artboard and master component of a document into a Flutter project.

    Widgets whose settings exclude them from the project are skipped. Color and
    character style classes are written when enabled in the document settings.

    Args:
        params: FlutterExportAllInput containing:
            - file_key (str) or document_path (str): the document
            - project_path (Optional[str]): Flutter project root

    Returns:
        str: Summary of exported widgets and export warnings
    """
    try:
        root = await _load_source(params)

        alerts: List[str] = []
        ctx = await export_all(root, _get_project(root, params.project_path), alert=alerts.append)
        if ctx is None:
            return _alert_error(alerts)
        return _format_result(ctx)

    except Exception as e:
        return _handle_api_error(e)


@mcp.tool(
    name="flutter_get_node_settings",
    annotations={
        "title": "Get Flutter Export Settings",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    }
)
async def flutter_get_node_settings(params: FlutterNodeSettingsInput) -> str:
    """
    Show how a node will be exported.

    Includes the node's kind, its stored export settings, the decorators
    that wrap it and the parameters it exposes.

    Args:
        params: FlutterNodeSettingsInput containing:
            - file_key (str) or document_path (str): the document
            - node_id (str): Node ID (e.g., '1:2' or '1-2')
            - response_format: 'markdown' or 'json'

    Returns:
        str: Node export settings in requested format
    """
    try:
        root = await _load_source(params)
        source = find_node(root, params.node_id)
        if source is None:
            return f"Error: Node '{params.node_id}' not found in document."

        details = _describe_node(source, root)
        if params.response_format == ResponseFormat.JSON:
            return json.dumps(details, indent=2)

        lines = [
            f"# Node: {details['name']}",
            f"**ID:** `{details['id']}`",
            f"**Type:** {details['type']} ({details['label']})",
            "",
        ]
        if details.get('widgetName'):
            lines.append(f"**Widget Name:** `{details['widgetName']}`")
            lines.append("")
        if details.get('settings'):
            lines.extend(["## Settings", ""])
            for key, value in details['settings'].items():
                lines.append(f"- **{key}:** `{value}`")
            lines.append("")
        if details.get('decorators'):
            lines.append(f"**Decorators:** {', '.join(details['decorators'])}")
        if 'hasLayout' in details:
            lines.append(f"**Layout:** {'Yes' if details['hasLayout'] else 'No'}")
        for title, key in (("Parameters", 'parameters'), ("Widget Parameters", 'widgetParameters')):
            if details.get(key):
                lines.extend(["", f"## {title}", ""])
                for name, param in details[key].items():
                    lines.append(f"- **{name}:** {param}")
        return "\n".join(lines)

    except Exception as e:
        return _handle_api_error(e)


# ============================================================================
# Entry Point
# ============================================================================

def main() -> None:
    # stdout carries the protocol
    logging.basicConfig(
        level=os.environ.get("FLUTTER_EXPORT_LOG_LEVEL", "WARNING").upper(),
        stream=sys.stderr,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    mcp.run()


if __name__ == "__main__":
    main()
