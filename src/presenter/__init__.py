"""
Presenter - flash messages and template rendering for Python web applications

Two request-scoped helpers for a host web framework:
- FlashStore: per-key flash messages carried across one request through the session
- ViewRenderer: Jinja2 rendering façade with HTML, JSON, raw, JS, redirect
  and 404 render types and header emission

Example:
    >>> from presenter import FlashStore, ViewRenderer
    >>>
    >>> session = {}
    >>> flash = FlashStore(session)
    >>> flash.add_message('notice', 'Saved')
    >>>
    >>> view = ViewRenderer(engine_options={'template_dir': 'templates'})
    >>> view.assign_json({'ok': True})
    >>> body = view.render()
"""

__version__ = "0.1.0"
__author__ = "Presenter Team"

from presenter.config import EngineOptions, FlashConfig, PresenterConfig, TemplateOptions, load_config
from presenter.exceptions import (
    ConfigurationError, InvalidArgumentError, PresenterError, SerializationError
)
from presenter.flash import FlashStore, get_flash_store, init_flash_store, install_flash_helpers
from presenter.session import MemorySessionStore, SessionInterface, get_current_session, session_scope
from presenter.templating import (
    HeaderLine, Headers, PluginType, Redirect, RenderType, TemplateEngine, ViewRenderer
)

__all__ = [
    # Flash messages
    "FlashStore", "get_flash_store", "init_flash_store", "install_flash_helpers",

    # Rendering
    "ViewRenderer", "Redirect", "RenderType", "PluginType", "TemplateEngine",
    "HeaderLine", "Headers",

    # Sessions
    "MemorySessionStore", "SessionInterface", "get_current_session", "session_scope",

    # Configuration and errors
    "PresenterConfig", "FlashConfig", "EngineOptions", "TemplateOptions", "load_config",
    "PresenterError", "ConfigurationError", "InvalidArgumentError", "SerializationError",
]
