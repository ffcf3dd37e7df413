"""Export node kinds."""

from .abstractnode import AbstractNode
from .abstractwidget import AbstractWidget
from .artboard import Artboard
from .component import Component
from .grid import Grid
from .group import Group
from .shape import Shape
from .text import Text

__all__ = ['AbstractNode', 'AbstractWidget', 'Artboard', 'Component', 'Grid', 'Group', 'Shape', 'Text']
