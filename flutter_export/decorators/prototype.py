"""Prototype interactions: a click that navigates to another artboard."""

from typing import Dict, Any, Optional

from .abstractdecorator import AbstractDecorator

PAGE_LINK_IMPORT = 'package:adobe_xd/page_link.dart'

DIRECTIONS = {'LEFT': 'Left', 'RIGHT': 'Right', 'TOP': 'Up', 'BOTTOM': 'Down'}


def get_navigate_action(source: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """The first on-click action that navigates to another node."""
    for reaction in source.get('reactions') or []:
        if (reaction.get('trigger') or {}).get('type') != 'ON_CLICK':
            continue
        for action in reaction.get('actions') or [reaction.get('action')]:
            if (action and action.get('type') == 'NODE' and action.get('destinationId')
                    and action.get('navigation', 'NAVIGATE') == 'NAVIGATE'):
                return action
    return None


def get_transition(transition: Optional[Dict[str, Any]]) -> str:
    if not transition:
        return ''
    kind = transition.get('type')
    if kind == 'DISSOLVE':
        return "transition: LinkTransition.Fade, "
    direction = DIRECTIONS.get(transition.get('direction'))
    if direction and kind in ('MOVE_IN', 'SLIDE_IN'):
        return f"transition: LinkTransition.Slide{direction}, "
    if direction and kind == 'PUSH':
        return f"transition: LinkTransition.Push{direction}, "
    return ''


class Prototype(AbstractDecorator):

    @classmethod
    def create(cls, node, ctx):
        if ctx.project_props.enable_prototype and get_navigate_action(node.source):
            return cls(node, ctx)
        return None

    def _serialize(self, node_str, ctx):
        action = get_navigate_action(self.node.source)
        destination = ctx.artboards.get(action['destinationId'])
        if destination is None:
            ctx.log.warn("Prototype link does not lead to an artboard.", self.node.source)
            return node_str
        ctx.add_import(PAGE_LINK_IMPORT)
        ctx.add_import(f"./{destination.file_name}")
        return (f"PageLink(links: [PageLinkInfo({get_transition(action.get('transition'))}"
                f"pageBuilder: () => {destination.widget_name}(), ), ], child: {node_str}, )")
