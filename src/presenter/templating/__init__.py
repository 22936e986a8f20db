"""
Template rendering façade over Jinja2.
"""

from presenter.templating.engine import PluginRegistration, TemplateEngine, create_engine
from presenter.templating.headers import HEADERS, HeaderLine, Headers, headers_for
from presenter.templating.renderer import Redirect, ViewRenderer
from presenter.templating.types import PluginType, RenderType

__all__ = [
    'ViewRenderer',
    'Redirect',
    'RenderType',
    'PluginType',
    'TemplateEngine',
    'PluginRegistration',
    'create_engine',
    'HEADERS',
    'HeaderLine',
    'Headers',
    'headers_for',
]
