"""Opacity and blend mode."""

from ..base import fix
from .abstractdecorator import AbstractDecorator

BLEND_MODES = {
    'MULTIPLY': 'BlendMode.multiply', 'SCREEN': 'BlendMode.screen', 'OVERLAY': 'BlendMode.overlay',
    'DARKEN': 'BlendMode.darken', 'LIGHTEN': 'BlendMode.lighten', 'COLOR_DODGE': 'BlendMode.colorDodge',
    'COLOR_BURN': 'BlendMode.colorBurn', 'SOFT_LIGHT': 'BlendMode.softLight', 'HARD_LIGHT': 'BlendMode.hardLight',
    'DIFFERENCE': 'BlendMode.difference', 'EXCLUSION': 'BlendMode.exclusion', 'HUE': 'BlendMode.hue',
    'SATURATION': 'BlendMode.saturation', 'COLOR': 'BlendMode.color', 'LUMINOSITY': 'BlendMode.luminosity',
}


class Blend(AbstractDecorator):
    cosmetic = True

    @classmethod
    def create(cls, node, ctx):
        source = node.source
        if source.get('opacity', 1) < 1 or source.get('blendMode') in BLEND_MODES:
            return cls(node, ctx)
        return None

    def _serialize(self, node_str, ctx):
        source = self.node.source
        opacity = fix(source.get('opacity', 1), 2)
        blend_mode = BLEND_MODES.get(source.get('blendMode'))
        if not blend_mode:
            return f"Opacity(opacity: {opacity}, child: {node_str}, )"

        ctx.add_import('package:adobe_xd/blend_mask.dart')
        bounds = self.node.adjusted_bounds
        return (f"BlendMask(blendMode: {blend_mode}, opacity: {opacity}, "
                f"region: Offset(0.0, 0.0) & Size({fix(bounds['width'])}, {fix(bounds['height'])}), "
                f"child: {node_str}, )")
