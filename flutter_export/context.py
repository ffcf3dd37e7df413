"""Per-operation state: target, widget registry, imports and diagnostics."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, List, Dict, Any, TYPE_CHECKING

from . import nodeutils
from .base import get_fill
from .proptype import ProjectProps

if TYPE_CHECKING:
    from .nodes.abstractwidget import AbstractWidget

logger = logging.getLogger(__name__)

IMAGE_SCALES = ('2.0x', '3.0x')


class ContextTarget(str, Enum):
    CLIPBOARD = "clipboard"
    FILES = "files"


@dataclass
class LogEntry:
    level: str                      # "warning" | "error"
    message: str
    node_id: Optional[str] = None
    node_name: Optional[str] = None

    def __str__(self) -> str:
        if self.node_name or self.node_id:
            return f"{self.message} ({self.node_name} `{self.node_id}`)"
        return self.message


class Log:
    """Diagnostics sink. Entries are kept for the result and mirrored to `logging`."""

    def __init__(self):
        self.entries: List[LogEntry] = []

    def warn(self, message: str, node: Optional[Dict[str, Any]] = None) -> None:
        self._add("warning", logging.WARNING, message, node)

    def error(self, message: str, node: Optional[Dict[str, Any]] = None) -> None:
        self._add("error", logging.ERROR, message, node)

    def _add(self, level: str, log_level: int, message: str, node: Optional[Dict[str, Any]]) -> None:
        entry = LogEntry(
            level=level,
            message=message,
            node_id=node.get('id') if node else None,
            node_name=node.get('name') if node else None,
        )
        self.entries.append(entry)
        logger.log(log_level, "%s", entry)

    @property
    def warnings(self) -> List[LogEntry]:
        return [e for e in self.entries if e.level == "warning"]

    @property
    def errors(self) -> List[LogEntry]:
        return [e for e in self.entries if e.level == "error"]


class Context:
    """State for one user-invoked operation (copy one, export one, export all)."""

    def __init__(self, target: ContextTarget, project_props: Optional[ProjectProps] = None):
        self.target = target
        self.project_props = project_props or ProjectProps()
        self.log = Log()
        self.artboards: Dict[str, 'AbstractWidget'] = {}
        self.master_components: Dict[str, 'AbstractWidget'] = {}
        self.result_message: Optional[str] = None
        self.output: Optional[str] = None
        self.images: Dict[str, Optional[str]] = {}     # asset path -> imageRef
        self._import_scopes: List[List[str]] = []

    @property
    def widget_prefix(self) -> str:
        return self.project_props.widget_prefix

    @property
    def image_path(self) -> str:
        return self.project_props.image_path or "assets/images"

    @property
    def widgets(self) -> Dict[str, 'AbstractWidget']:
        return {**self.artboards, **self.master_components}

    def add_artboard(self, node: 'AbstractWidget') -> None:
        self.artboards[node.source_id] = node

    def add_master_component(self, node: 'AbstractWidget') -> None:
        self.master_components[node.source_id] = node

    def add_image(self, node: Dict[str, Any]) -> None:
        """Record the image fill of `node` as an asset the generated code loads."""
        fill = get_fill(node)
        self.images.setdefault(nodeutils.get_image_path(node, self), fill.image_ref if fill else None)

    @property
    def image_files(self) -> List[str]:
        """Asset files to provide, with 2.0x and 3.0x variants for resolution aware images."""
        files = []
        for path in self.images:
            files.append(path)
            if self.project_props.resolution_aware:
                folder, _, name = path.rpartition('/')
                files.extend(f"{folder}/{scale}/{name}" for scale in IMAGE_SCALES)
        return files

    def push_imports(self) -> None:
        self._import_scopes.append([])

    def add_import(self, path: str) -> None:
        """Record an import for the widget file currently being serialized."""
        if not self._import_scopes:
            return
        scope = self._import_scopes[-1]
        if path not in scope:
            scope.append(path)

    def pop_imports(self) -> List[str]:
        return self._import_scopes.pop() if self._import_scopes else []
