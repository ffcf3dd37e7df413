"""
Persisted per-node settings.

The host stores settings in each node's `pluginData` bag under the keys in
`PropType`. `NodeProps` and `ProjectProps` give that open mapping a typed
shape with defaults, parsed once when a node is built.
"""

import logging
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field, ConfigDict, ValidationError, field_validator

logger = logging.getLogger(__name__)


class PropType:
    """pluginData keys."""
    # node
    WIDGET_NAME = "widgetName"
    INCLUDE_IN_EXPORT_PROJECT = "includeInExportProject"
    IS_NO_LAYOUT = "isNoLayout"
    IS_CUSTOM_WIDGET = "isCustomWidget"
    CUSTOM_WIDGET = "customWidget"
    CUSTOM_SLOT = "customSlot"
    CUSTOM_CHILDREN = "customChildren"
    CUSTOM_EXTENDS = "customExtends"
    TEXT_PARAM_NAME = "textParamName"
    IMAGE_PARAM_NAME = "imageParamName"
    COLOR_PARAM_NAME = "colorParamName"
    TAP_CALLBACK_NAME = "tapCallbackName"
    IMAGE_FILL_NAME = "imageFillName"
    FLUTTER_FONT = "flutterFont"
    DECORATE_ONLY = "decorateOnly"
    COMBINE_SHAPES = "combineShapes"

    # document root
    EXPORT_PATH = "exportPath"
    CODE_PATH = "codePath"
    IMAGE_PATH = "imagePath"
    WIDGET_PREFIX = "widgetPrefix"
    EXPORT_COLORS = "exportColors"
    COLORS_CLASS_NAME = "colorsClassName"
    EXPORT_CHAR_STYLES = "exportCharStyles"
    CHAR_STYLES_CLASS_NAME = "charStylesClassName"
    ENABLE_PROTOTYPE = "enablePrototype"
    RESOLUTION_AWARE = "resolutionAware"


DEFAULT_SLOT = "children"


def _plugin_data(node: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    data = node.get('pluginData') if node else None
    return data if isinstance(data, dict) else {}


class NodeProps(BaseModel):
    """Settings of a single design node."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra='ignore', frozen=True)

    widget_name: Optional[str] = Field(default=None, alias=PropType.WIDGET_NAME)
    include_in_export_project: bool = Field(default=True, alias=PropType.INCLUDE_IN_EXPORT_PROJECT)
    is_no_layout: bool = Field(default=False, alias=PropType.IS_NO_LAYOUT)
    is_custom_widget: bool = Field(default=False, alias=PropType.IS_CUSTOM_WIDGET)
    custom_widget: Optional[str] = Field(default=None, alias=PropType.CUSTOM_WIDGET)
    custom_slot: Optional[str] = Field(default=None, alias=PropType.CUSTOM_SLOT)
    custom_children: Optional[str] = Field(default=None, alias=PropType.CUSTOM_CHILDREN)
    custom_extends: Optional[str] = Field(default=None, alias=PropType.CUSTOM_EXTENDS)
    text_param_name: Optional[str] = Field(default=None, alias=PropType.TEXT_PARAM_NAME)
    image_param_name: Optional[str] = Field(default=None, alias=PropType.IMAGE_PARAM_NAME)
    color_param_name: Optional[str] = Field(default=None, alias=PropType.COLOR_PARAM_NAME)
    tap_callback_name: Optional[str] = Field(default=None, alias=PropType.TAP_CALLBACK_NAME)
    image_fill_name: Optional[str] = Field(default=None, alias=PropType.IMAGE_FILL_NAME)
    flutter_font: Optional[str] = Field(default=None, alias=PropType.FLUTTER_FONT)
    decorate_only: bool = Field(default=False, alias=PropType.DECORATE_ONLY)
    combine_shapes: bool = Field(default=False, alias=PropType.COMBINE_SHAPES)

    @field_validator(
        'widget_name', 'custom_widget', 'custom_slot', 'custom_children', 'custom_extends',
        'text_param_name', 'image_param_name', 'color_param_name', 'tap_callback_name',
        'image_fill_name', 'flutter_font',
        mode='before',
    )
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('custom_slot')
    @classmethod
    def default_slot_to_none(cls, v: Optional[str]) -> Optional[str]:
        return None if v == DEFAULT_SLOT else v

    @classmethod
    def from_node(cls, node: Optional[Dict[str, Any]]) -> 'NodeProps':
        try:
            return cls.model_validate(_plugin_data(node))
        except ValidationError as e:
            logger.warning("Ignoring invalid settings on node %s: %s", node.get('id') if node else None, e)
            return cls()

    @property
    def custom_widget_name(self) -> Optional[str]:
        """Class name of the custom widget, with any package path and extension stripped."""
        if not (self.is_custom_widget and self.custom_widget):
            return None
        name = self.custom_widget
        if name.startswith('package'):
            filename = name[name.rfind('/') + 1:]
            return filename.removesuffix('.dart')
        return name

    @property
    def custom_widget_import(self) -> Optional[str]:
        """The package the custom widget is declared in, when it is given as a package path."""
        if self.is_custom_widget and self.custom_widget and self.custom_widget.startswith('package'):
            return self.custom_widget
        return None


class ProjectProps(BaseModel):
    """Document-wide settings, stored on the document root."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra='ignore', frozen=True)

    export_path: Optional[str] = Field(default=None, alias=PropType.EXPORT_PATH)
    code_path: str = Field(default="lib", alias=PropType.CODE_PATH)
    image_path: str = Field(default="assets/images", alias=PropType.IMAGE_PATH)
    widget_prefix: str = Field(default="", alias=PropType.WIDGET_PREFIX)
    export_colors: bool = Field(default=False, alias=PropType.EXPORT_COLORS)
    colors_class_name: str = Field(default="XDColors", alias=PropType.COLORS_CLASS_NAME)
    export_char_styles: bool = Field(default=False, alias=PropType.EXPORT_CHAR_STYLES)
    char_styles_class_name: str = Field(default="XDTextStyles", alias=PropType.CHAR_STYLES_CLASS_NAME)
    enable_prototype: bool = Field(default=True, alias=PropType.ENABLE_PROTOTYPE)
    resolution_aware: bool = Field(default=False, alias=PropType.RESOLUTION_AWARE)

    @field_validator('export_path', mode='before')
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('code_path', 'image_path', mode='before')
    @classmethod
    def clean_path(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().strip('/')
        return v

    @classmethod
    def from_node(cls, root: Optional[Dict[str, Any]]) -> 'ProjectProps':
        try:
            return cls.model_validate(_plugin_data(root))
        except ValidationError as e:
            logger.warning("Ignoring invalid project settings: %s", e)
            return cls()
