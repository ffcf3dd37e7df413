"""Rectangles, ellipses and vector shapes."""

from typing import Dict, Any, List

from .. import nodetype, nodeutils
from ..base import ColorValue, fix, get_color, get_fill, get_gradient, get_string
from ..parameter import ParamType
from .abstractnode import AbstractNode

SVG_IMPORT = 'package:flutter_svg/flutter_svg.dart'


class Shape(AbstractNode):

    @classmethod
    def create(cls, source, ctx):
        if nodetype.get_type(source) == nodetype.SHAPE:
            return cls(source, ctx)
        return None

    def __init__(self, source, ctx):
        super().__init__(source, ctx)
        fill = get_fill(source)
        if self.is_box and fill is not None:
            if fill.type == 'IMAGE':
                self.add_param('fill', self.props.image_param_name, ParamType.IMAGE,
                               nodeutils.get_asset_image(source, ctx))
            elif fill.type == 'SOLID':
                self.add_param('color', self.props.color_param_name, ParamType.COLOR, get_color(fill.color))

    @property
    def is_box(self) -> bool:
        return self.source.get('type') in nodetype.BOX_SHAPE_TYPES

    @property
    def decorate_only(self) -> bool:
        """True when only the BoxDecoration is emitted, for use as another widget's argument."""
        return self.is_box and self.props.decorate_only

    def _serialize(self, ctx):
        if self.is_box:
            decoration = f"BoxDecoration({self._get_decoration_param_list(ctx)})"
            if self.decorate_only:
                return decoration
            return f"Container(decoration: {decoration}, )"
        if self.props.decorate_only:
            ctx.log.warn("Only rectangles and ellipses can export decorations only.", self.source)
        return self._serialize_svg(ctx)

    def _decorate(self, node_str, ctx):
        # a decoration is not a widget, nothing can wrap it
        if self.decorate_only:
            return node_str
        return super()._decorate(node_str, ctx)

    # ------------------------------------------------------------------
    # BoxDecoration
    # ------------------------------------------------------------------

    def _get_decoration_param_list(self, ctx) -> str:
        return (self._get_fill_param(ctx) + self._get_border_param()
                + self._get_radius_param() + self._get_shadow_param())

    def _get_fill_param(self, ctx) -> str:
        fill = get_fill(self.source)
        if fill is None:
            return ''
        if fill.type == 'SOLID':
            return f"color: {self.get_param_name('color') or get_color(fill.color)}, "
        if fill.type == 'IMAGE':
            ctx.add_image(self.source)
            image = self.get_param_name('fill') or nodeutils.get_asset_image(self.source, ctx)
            return f"image: DecorationImage(image: {image}, fit: BoxFit.cover, ), "
        if fill.gradient:
            return f"gradient: {get_gradient(fill.gradient)}, "
        return ''

    def _get_border_param(self) -> str:
        weight = self.source.get('strokeWeight', 0)
        stroke = _get_solid_stroke(self.source)
        if stroke is None or not weight:
            return ''
        return f"border: Border.all(width: {fix(weight)}, color: {get_color(stroke)}, ), "

    def _get_radius_param(self) -> str:
        if self.source.get('type') == 'ELLIPSE':
            size = nodeutils.get_local_size(self.source)
            return (f"borderRadius: BorderRadius.all(Radius.elliptical("
                    f"{fix(size['width'] / 2)}, {fix(size['height'] / 2)})), ")
        radii = self.source.get('rectangleCornerRadii')
        if radii and len(radii) == 4 and len(set(radii)) > 1:
            tl, tr, br, bl = radii
            return (f"borderRadius: BorderRadius.only(topLeft: Radius.circular({fix(tl)}), "
                    f"topRight: Radius.circular({fix(tr)}), bottomRight: Radius.circular({fix(br)}), "
                    f"bottomLeft: Radius.circular({fix(bl)}), ), ")
        radius = self.source.get('cornerRadius')
        if radius:
            return f"borderRadius: BorderRadius.circular({fix(radius)}), "
        return ''

    def _get_shadow_param(self) -> str:
        shadows = [e for e in self.source.get('effects', [])
                   if e.get('type') == 'DROP_SHADOW' and e.get('visible', True)]
        if not shadows:
            return ''
        result = ''
        for shadow in shadows:
            offset = shadow.get('offset', {})
            color = ColorValue.from_dict(shadow.get('color', {}))
            result += (f"BoxShadow(color: {get_color(color)}, "
                       f"offset: Offset({fix(offset.get('x', 0))}, {fix(offset.get('y', 0))}), "
                       f"blurRadius: {fix(shadow.get('radius', 0))}, ), ")
        return f"boxShadow: [{result}], "

    # ------------------------------------------------------------------
    # SVG
    # ------------------------------------------------------------------

    def _serialize_svg(self, ctx) -> str:
        paths = get_svg_paths(self.source)
        if not paths:
            ctx.log.warn("Shape has no path data and was not exported.", self.source)
            return ''
        return get_svg_picture(paths, nodeutils.get_local_size(self.source), ctx)


def get_svg_paths(source: Dict[str, Any]) -> List[str]:
    """SVG `<path>` elements for a node's fill and stroke geometry."""
    paths = []
    fill = get_fill(source)
    fill_attr = f'fill="{fill.color.hex}"' if fill and fill.type == 'SOLID' else 'fill="none"'
    for geometry in source.get('fillGeometry') or []:
        paths.append(_svg_path(geometry, fill_attr))
    stroke = _get_solid_stroke(source)
    if stroke is not None:
        for geometry in source.get('strokeGeometry') or []:
            paths.append(_svg_path(geometry, f'fill="{stroke.hex}"'))
    return [p for p in paths if p]


def get_svg_picture(elements: List[str], size: Dict[str, float], ctx) -> str:
    svg = (f'<svg viewBox="0 0 {fix(size["width"])} {fix(size["height"])}">'
           + ''.join(elements) + '</svg>')
    ctx.add_import(SVG_IMPORT)
    return f"SvgPicture.string({get_string(svg)}, allowDrawingOutsideViewBox: true, fit: BoxFit.fill, )"


def _get_solid_stroke(source: Dict[str, Any]):
    for stroke in reversed(source.get('strokes', [])):
        if stroke.get('visible', True) and stroke.get('type', 'SOLID') == 'SOLID':
            return ColorValue.from_dict(stroke.get('color', {}), stroke.get('opacity', 1))
    return None


def _svg_path(geometry: Dict[str, Any], fill_attr: str) -> str:
    data = geometry.get('path')
    if not data:
        return ''
    rule = ' fill-rule="evenodd"' if geometry.get('windingRule') == 'EVENODD' else ''
    return f'<path d="{data}" {fill_attr}{rule}/>'
