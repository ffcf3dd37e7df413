"""Wrappers applied around a node's generated code, innermost first."""

from .abstractdecorator import AbstractDecorator
from .blend import Blend
from .blur import Blur
from .layout import Layout
from .ontap import OnTap
from .prototype import Prototype
from .transform import Transform

# order of registration, innermost first; Layout is applied separately, last
DECORATORS = (Blur, Blend, Transform, OnTap, Prototype)

__all__ = ['AbstractDecorator', 'Blend', 'Blur', 'Layout', 'OnTap', 'Prototype', 'Transform', 'DECORATORS']
