"""Tap callbacks exposed as widget parameters."""

from .abstractdecorator import AbstractDecorator


class OnTap(AbstractDecorator):

    @classmethod
    def create(cls, node, ctx):
        if node.props.tap_callback_name:
            return cls(node, ctx)
        return None

    @property
    def callback_name(self) -> str:
        return self.node.props.tap_callback_name

    def _serialize(self, node_str, ctx):
        return f"GestureDetector(onTap: () => {self.callback_name}?.call(), child: {node_str}, )"
