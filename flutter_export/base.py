"""
Shared helpers for Dart code generation.

Color and fill parsing for Figma-shaped node dicts, Dart literal builders
(colors, gradients, strings, doubles) and identifier cleaning.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional


# ---------------------------------------------------------------------------
# Fill data
# ---------------------------------------------------------------------------

@dataclass
class ColorValue:
    """An RGBA color with 0-1 channels, as stored in Figma paints."""
    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_dict(cls, color: Dict[str, Any], opacity: float = 1.0) -> 'ColorValue':
        return cls(
            r=color.get('r', 0),
            g=color.get('g', 0),
            b=color.get('b', 0),
            a=color.get('a', 1) * opacity,
        )

    @property
    def argb(self) -> int:
        a, r, g, b = (round(max(0.0, min(1.0, c)) * 255) for c in (self.a, self.r, self.g, self.b))
        return (a << 24) | (r << 16) | (g << 8) | b

    @property
    def hex(self) -> str:
        r, g, b, a = (round(max(0.0, min(1.0, c)) * 255) for c in (self.r, self.g, self.b, self.a))
        if a < 255:
            return f"#{r:02x}{g:02x}{b:02x}{a:02x}"
        return f"#{r:02x}{g:02x}{b:02x}"


@dataclass
class GradientStop:
    color: ColorValue
    position: float


@dataclass
class GradientDef:
    type: str                                   # LINEAR | RADIAL | ANGULAR | DIAMOND
    stops: List[GradientStop]
    handle_positions: List[Dict[str, float]] = field(default_factory=list)
    opacity: float = 1.0


@dataclass
class FillLayer:
    type: str                                   # SOLID | GRADIENT_* | IMAGE
    color: Optional[ColorValue] = None
    gradient: Optional[GradientDef] = None
    image_ref: Optional[str] = None
    opacity: float = 1.0


def parse_gradient(paint: Dict[str, Any]) -> Optional[GradientDef]:
    """Build a GradientDef from a GRADIENT_* paint dict."""
    paint_type = paint.get('type', '')
    if not paint_type.startswith('GRADIENT_'):
        return None
    stops = [
        GradientStop(color=ColorValue.from_dict(stop.get('color', {})), position=stop.get('position', 0))
        for stop in paint.get('gradientStops', [])
    ]
    return GradientDef(
        type=paint_type.replace('GRADIENT_', ''),
        stops=stops,
        handle_positions=paint.get('gradientHandlePositions', []),
        opacity=paint.get('opacity', 1),
    )


def parse_fills(node: Dict[str, Any]) -> List[FillLayer]:
    """Parse the visible fills of a node, top-most last (Figma order)."""
    layers = []
    for fill in node.get('fills', []):
        if not fill.get('visible', True):
            continue
        fill_type = fill.get('type', 'SOLID')
        opacity = fill.get('opacity', 1)
        if fill_type == 'SOLID':
            layers.append(FillLayer(
                type=fill_type,
                color=ColorValue.from_dict(fill.get('color', {}), opacity),
                opacity=opacity,
            ))
        elif fill_type.startswith('GRADIENT_'):
            layers.append(FillLayer(type=fill_type, gradient=parse_gradient(fill), opacity=opacity))
        elif fill_type == 'IMAGE':
            layers.append(FillLayer(type=fill_type, image_ref=fill.get('imageRef'), opacity=opacity))
    return layers


def get_fill(node: Dict[str, Any]) -> Optional[FillLayer]:
    """The top-most visible fill, which is the one a single-fill widget can show."""
    layers = parse_fills(node)
    return layers[-1] if layers else None


# ---------------------------------------------------------------------------
# Dart literals
# ---------------------------------------------------------------------------

def fix(num: float, digits: int = 1) -> str:
    """Round half up to `digits` places and print as a Dart double."""
    p = 10 ** digits
    value = math.floor(num * p + 0.5) / p
    if value == int(value):
        return f"{int(value)}.0"
    return repr(value)


def get_color(color: ColorValue, use_const: bool = True) -> str:
    return f"{'const ' if use_const else ''}Color(0x{color.argb:08x})"


def get_string(text: Optional[str]) -> str:
    """Escape text into a single-quoted Dart string literal."""
    if text is None:
        return 'null'
    escaped = (text.replace('\\', '\\\\')
               .replace("'", "\\'")
               .replace('$', '\\$')
               .replace('\r', '')
               .replace('\n', '\\n'))
    return f"'{escaped}'"


def get_alignment(x: float, y: float) -> str:
    return f"Alignment({fix(x * 2 - 1, 3)}, {fix(y * 2 - 1, 3)})"


def get_gradient_type(gradient: GradientDef) -> str:
    return 'RadialGradient' if gradient.type in ('RADIAL', 'DIAMOND') else 'LinearGradient'


def get_gradient(gradient: GradientDef) -> str:
    """Dart gradient constructor for a parsed gradient paint."""
    colors = ', '.join(get_color(stop.color, False) for stop in gradient.stops)
    stops = ', '.join(fix(stop.position, 3) for stop in gradient.stops)
    handles = gradient.handle_positions
    if get_gradient_type(gradient) == 'RadialGradient':
        center = handles[0] if handles else {'x': 0.5, 'y': 0.5}
        edge = handles[1] if len(handles) > 1 else {'x': 1.0, 'y': 0.5}
        radius = math.hypot(edge.get('x', 1) - center.get('x', 0.5), edge.get('y', 0.5) - center.get('y', 0.5))
        return (f"RadialGradient(center: {get_alignment(center.get('x', 0.5), center.get('y', 0.5))}, "
                f"radius: {fix(radius, 3)}, colors: [{colors}], stops: [{stops}], )")
    start = handles[0] if handles else {'x': 0.0, 'y': 0.5}
    end = handles[1] if len(handles) > 1 else {'x': 1.0, 'y': 0.5}
    return (f"LinearGradient(begin: {get_alignment(start.get('x', 0), start.get('y', 0.5))}, "
            f"end: {get_alignment(end.get('x', 1), end.get('y', 0.5))}, colors: [{colors}], stops: [{stops}], )")


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

def _words(name: Optional[str]) -> List[str]:
    return [w for w in re.split(r'[^a-zA-Z0-9]+', name or '') if w]


def clean_var_name(name: Optional[str]) -> str:
    """lowerCamelCase Dart identifier, '' when nothing usable remains."""
    words = _words(name)
    if not words:
        return ''
    result = words[0][0].lower() + words[0][1:] + ''.join(w[0].upper() + w[1:] for w in words[1:])
    return re.sub(r'^\d+', '', result)


def clean_class_name(name: Optional[str]) -> str:
    """UpperCamelCase Dart class name."""
    result = ''.join(w[0].upper() + w[1:] for w in _words(name))
    if result and not result[0].isalpha():
        result = 'Widget' + result
    return result


def clean_file_name(name: Optional[str]) -> str:
    return '_'.join(w.lower() for w in _words(name))
