"""Layer and background blur effects."""

from ..base import fix
from .abstractdecorator import AbstractDecorator


def _get_blur(source):
    for effect in source.get('effects', []):
        if effect.get('visible', True) and effect.get('type') in ('LAYER_BLUR', 'BACKGROUND_BLUR'):
            return effect
    return None


class Blur(AbstractDecorator):
    cosmetic = True

    @classmethod
    def create(cls, node, ctx):
        effect = _get_blur(node.source)
        if effect and effect.get('radius', 0) > 0:
            return cls(node, ctx)
        return None

    def _serialize(self, node_str, ctx):
        effect = _get_blur(self.node.source)
        sigma = fix(effect.get('radius', 0) / 2, 2)
        ctx.add_import('dart:ui as ui')
        image_filter = f"ui.ImageFilter.blur(sigmaX: {sigma}, sigmaY: {sigma})"
        if effect.get('type') == 'BACKGROUND_BLUR':
            return f"ClipRect(child: BackdropFilter(filter: {image_filter}, child: {node_str}, ), )"
        return f"ImageFiltered(imageFilter: {image_filter}, child: {node_str}, )"
