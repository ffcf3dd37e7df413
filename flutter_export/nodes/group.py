"""Groups and nested frames."""

from typing import List

from .. import nodetype, nodeutils
from ..base import fix
from .abstractnode import AbstractNode
from .shape import Shape, get_svg_paths, get_svg_picture


class Group(AbstractNode):

    @classmethod
    def create(cls, source, ctx):
        if nodetype.get_type(source) == nodetype.GROUP:
            return cls(source, ctx)
        return None

    def _serialize(self, ctx):
        if self.props.combine_shapes:
            return self._serialize_combined(ctx)
        if not self._get_child_list(ctx) and not self._get_child_slots():
            return ''
        return self._get_child_stack(ctx)

    def _serialize_combined(self, ctx) -> str:
        """All shapes under the group drawn as one SVG picture."""
        elements = self._get_combined_elements(self, ctx)
        if not elements:
            ctx.log.warn("Group has no shapes to combine.", self.source)
            return ''
        return get_svg_picture(elements, nodeutils.get_local_size(self.source), ctx)

    def _get_combined_elements(self, node: AbstractNode, ctx) -> List[str]:
        origin = nodeutils.get_bounds(self.source)
        elements = []
        for child in node.children:
            if isinstance(child, Group):
                elements.extend(self._get_combined_elements(child, ctx))
            elif isinstance(child, Shape):
                paths = get_svg_paths(child.source)
                if not paths:
                    continue
                bounds = nodeutils.get_bounds(child.source)
                x, y = fix(bounds['x'] - origin['x']), fix(bounds['y'] - origin['y'])
                elements.append(f'<g transform="translate({x} {y})">' + ''.join(paths) + '</g>')
            else:
                ctx.log.warn("Only shapes can be combined, this layer was left out.", child.source)
        return elements
