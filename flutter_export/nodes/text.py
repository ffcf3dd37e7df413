"""Text nodes, and the TextStyle builder shared with character style export."""

from typing import Dict, Any, Optional

from ..base import ColorValue, fix, get_color, get_fill, get_string
from ..parameter import ParamType
from .abstractnode import AbstractNode

TEXT_ALIGN = {
    'CENTER': 'TextAlign.center',
    'RIGHT': 'TextAlign.right',
    'JUSTIFIED': 'TextAlign.justify',
}

TEXT_DECORATION = {
    'UNDERLINE': 'TextDecoration.underline',
    'STRIKETHROUGH': 'TextDecoration.lineThrough',
}


def get_text_style_param_list(style: Dict[str, Any], color: Optional[str] = None,
                              font_family: Optional[str] = None) -> str:
    """Arguments of a Dart TextStyle for a Figma type style."""
    result = ''
    family = font_family or style.get('fontFamily')
    if family:
        result += f"fontFamily: {get_string(family)}, "
    font_size = style.get('fontSize')
    if font_size:
        result += f"fontSize: {fix(font_size)}, "
    if color:
        result += f"color: {color}, "
    letter_spacing = style.get('letterSpacing')
    if letter_spacing:
        result += f"letterSpacing: {fix(letter_spacing, 2)}, "
    weight = style.get('fontWeight')
    if weight and weight != 400:
        result += f"fontWeight: FontWeight.w{int(round(weight / 100.0)) * 100}, "
    if style.get('italic'):
        result += "fontStyle: FontStyle.italic, "
    line_height = style.get('lineHeightPx')
    if line_height and font_size and style.get('lineHeightUnit') != 'INTRINSIC_%':
        result += f"height: {fix(line_height / font_size, 2)}, "
    decoration = TEXT_DECORATION.get(style.get('textDecoration'))
    if decoration:
        result += f"decoration: {decoration}, "
    return result


def get_text_style(param_list: str) -> str:
    return f"TextStyle({param_list})" if param_list else ''


class Text(AbstractNode):

    @classmethod
    def create(cls, source, ctx):
        if source.get('type') == 'TEXT':
            return cls(source, ctx)
        return None

    def __init__(self, source, ctx):
        super().__init__(source, ctx)
        self.add_param('text', self.props.text_param_name, ParamType.TEXT, get_string(self.text))
        color = self._get_color(None)
        if color:
            self.add_param('color', self.props.color_param_name, ParamType.COLOR, get_color(color))

    @property
    def text(self) -> str:
        return self.source.get('characters', '')

    def _get_color(self, ctx) -> Optional[ColorValue]:
        fill = get_fill(self.source)
        if fill is None:
            return None
        if fill.type == 'SOLID':
            return fill.color
        if ctx is not None:
            ctx.log.warn("Only solid color fills are supported for text.", self.source)
        if fill.gradient and fill.gradient.stops:
            return fill.gradient.stops[0].color
        return None

    def _serialize(self, ctx):
        text = self.get_param_name('text') or get_string(self.text)
        style = self.source.get('style') or {}

        color = self.get_param_name('color')
        if not color:
            value = self._get_color(ctx)
            color = get_color(value) if value else None

        result = f"Text({text}, "
        style_str = get_text_style(get_text_style_param_list(style, color, self.props.flutter_font))
        if style_str:
            result += f"style: {style_str}, "
        align = TEXT_ALIGN.get(style.get('textAlignHorizontal'))
        if align:
            result += f"textAlign: {align}, "
        if self.source.get('textAutoResize') == 'WIDTH_AND_HEIGHT':
            result += "softWrap: false, "
        return result + ")"
