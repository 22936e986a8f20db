"""
Enumerations shared by the renderer and the engine adapter.
"""

from enum import Enum


class RenderType(str, Enum):
    """Render types; the value doubles as the header table key"""
    HTML = "html"
    JSON = "json"
    RAW = "raw"
    JS = "js"
    REDIRECT = "redirect"
    NOT_FOUND = "404"


class PluginType(str, Enum):
    """Template plugin kinds"""
    FUNCTION = "function"
    MODIFIER = "modifier"
    TEST = "test"


__all__ = ['RenderType', 'PluginType']
