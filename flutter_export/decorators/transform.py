"""Rotation."""

import math

from ..base import fix
from .abstractdecorator import AbstractDecorator


class Transform(AbstractDecorator):
    cosmetic = True

    @classmethod
    def create(cls, node, ctx):
        if node.transform['rotation']:
            return cls(node, ctx)
        return None

    def _serialize(self, node_str, ctx):
        transform = self.node.transform
        angle = fix(math.radians(transform['rotation']), 4)
        return f"Transform.rotate(angle: {angle}, child: {node_str}, )"
