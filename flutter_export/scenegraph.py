"""
Loading and querying source documents.

A document is a tree of Figma-shaped node dicts rooted at a DOCUMENT node.
Local documents are JSON files; remote ones come from the Figma REST API
(`GET /v1/files/:key`), where top level frames play the role of artboards.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

logger = logging.getLogger(__name__)

# namespace of the shared plugin data the settings are stored under
PLUGIN_NAMESPACE = "flutter_export"


class DocumentError(Exception):
    """A document could not be read or is not a scene graph."""


def load_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a scene graph JSON file. Accepts a bare DOCUMENT node or a Figma file response."""
    path = Path(path).expanduser()
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except FileNotFoundError as e:
        raise DocumentError(f"Document not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Unable to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DocumentError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict) and isinstance(data.get('document'), dict):
        return from_figma_file(data)
    if not isinstance(data, dict) or data.get('type') != 'DOCUMENT':
        raise DocumentError(f"{path} does not contain a DOCUMENT node")
    logger.debug("Loaded document %s", path)
    return data


def from_figma_file(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build a scene graph from a Figma file response.

    The response is not modified. Top level FRAMEs on each page become
    ARTBOARDs, and the response's `pluginData`/`assets` (when present) are
    kept on the document root.
    """
    document = data.get('document')
    if not isinstance(document, dict):
        raise DocumentError("Figma response has no document")
    root = copy.deepcopy(document)
    root['type'] = 'DOCUMENT'
    for page in root.get('children', []):
        if page.get('type') != 'CANVAS':
            continue
        for child in page.get('children', []):
            if child.get('type') == 'FRAME':
                child['type'] = 'ARTBOARD'
    for key in ('pluginData', 'assets'):
        if key in data and key not in root:
            root[key] = copy.deepcopy(data[key])
    for node in iter_nodes(root):
        shared = node.pop('sharedPluginData', None) or {}
        if PLUGIN_NAMESPACE in shared and not node.get('pluginData'):
            node['pluginData'] = dict(shared[PLUGIN_NAMESPACE])
    return root


def iter_nodes(root: Optional[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
    """Depth first, parents before children."""
    if not root:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.get('children') or []))


def find_node(root: Optional[Dict[str, Any]], node_id: str) -> Optional[Dict[str, Any]]:
    for node in iter_nodes(root):
        if node.get('id') == node_id:
            return node
    return None
