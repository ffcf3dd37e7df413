"""Base class for code decorators."""


class AbstractDecorator:
    """
    Wraps or rewrites the code of the node it is attached to.

    Subclasses implement `_serialize` and a `create(node, ctx)` classmethod
    that returns an instance, or None when the node doesn't need one.
    Cosmetic decorators only change appearance.
    """
    cosmetic = False

    @classmethod
    def create(cls, node, ctx):
        return None

    def __init__(self, node, ctx):
        self.node = node

    def serialize(self, node_str: str, ctx) -> str:
        if not node_str:
            return node_str
        return self._serialize(node_str, ctx)

    def _serialize(self, node_str: str, ctx) -> str:
        return node_str
