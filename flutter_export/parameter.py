"""Named values a node exposes to its enclosing widget or repeat grid."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ParamType(str, Enum):
    """Parameter kinds, valued by the Dart type they declare."""
    TEXT = "String"
    IMAGE = "ImageProvider"
    COLOR = "Color"
    TAP = "VoidCallback?"

    @property
    def nullable(self) -> bool:
        return self.value.endswith('?')


@dataclass
class Parameter:
    name: str
    type: Optional[ParamType] = None
    value: Optional[str] = None         # Dart expression, used as the default
