"""
Flutter export.

Turns a design scene graph (Figma-shaped node dicts) into Flutter widget
source: one Dart expression per node, one file per artboard or master
component.
"""

from .context import Context, ContextTarget, Log, LogEntry
from .dart_export import copy_selected, export_all, export_selected, get_export_all_message, write_widget
from .formatter import DartFormatError, format_dart
from .parse import parse
from .project import Project, ProjectError
from .proptype import NodeProps, ProjectProps, PropType
from .scenegraph import DocumentError, find_node, from_figma_file, iter_nodes, load_document

__version__ = "0.1.0"

__all__ = [
    'Context', 'ContextTarget', 'Log', 'LogEntry',
    'copy_selected', 'export_all', 'export_selected', 'get_export_all_message', 'write_widget',
    'DartFormatError', 'format_dart',
    'parse',
    'Project', 'ProjectError',
    'NodeProps', 'ProjectProps', 'PropType',
    'DocumentError', 'find_node', 'from_figma_file', 'iter_nodes', 'load_document',
]
