"""
View renderer

Holds template variables, a render type and deferred engine options, and
turns them into a response body plus headers. The template engine is
created lazily, at most once, the first time an HTML or 404 render needs it.

Render dispatch:
- redirect: no body, headers skipped
- json: template variables serialized to JSON
- raw, js: raw content returned unchanged
- 404 and html: template fetched from the engine
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from presenter.config import EngineOptions, TemplateOptions
from presenter.exceptions import ConfigurationError, SerializationError
from presenter.templating.engine import PluginRegistration, TemplateEngine, create_engine
from presenter.templating.headers import HeaderLine, Headers, headers_for
from presenter.templating.types import PluginType, RenderType
from presenter.utils import absolute_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Redirect:
    """Returned by make_redirect; the host ends the response with it"""
    location: str
    code: int
    replace: bool = True


class ViewRenderer:
    """Template rendering façade with a render type state machine"""

    def __init__(self, request: Optional[Mapping[str, Any]] = None,
                 engine_options: Union[EngineOptions, Mapping[str, Any], None] = None,
                 template_options: Union[TemplateOptions, Mapping[str, Any], None] = None,
                 engine_factory: Callable[[EngineOptions], TemplateEngine] = create_engine):
        self.request = request or {}
        self.engine_options = EngineOptions.from_mapping(engine_options)
        self.template_options = TemplateOptions.from_mapping(template_options)
        self.engine_factory = engine_factory
        self.headers = Headers()

        self._engine: Optional[TemplateEngine] = None
        self._plugins: List[PluginRegistration] = []
        self._redirect_options: Optional[Dict[str, Any]] = None

        self.template_vars: Dict[str, Any] = {}
        self.template_file = ''
        self.render_type = RenderType.HTML
        self.raw_content = ''

        self.set_template(self.template_options.file)

    # Deferred engine

    @property
    def is_engine_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Optional[TemplateEngine]:
        return self._engine

    def ensure_engine(self) -> TemplateEngine:
        """Create the engine on first use and apply queued plugins"""
        if self._engine is None:
            engine = self.engine_factory(self.engine_options)
            for plugin in self._plugins:
                engine.register_plugin(plugin.type, plugin.name, plugin.callback,
                                       plugin.cacheable, plugin.cache_attrs)
            self._engine = engine
        return self._engine

    def _set_engine_option(self, name: str, value: Any) -> 'ViewRenderer':
        if self._engine is not None:
            logger.warning(f"Engine already initialized, '{name}' change has no effect")
        setattr(self.engine_options, name, value)
        return self

    def set_template_dir(self, path: str) -> 'ViewRenderer':
        return self._set_engine_option('template_dir', path)

    def set_compile_dir(self, path: str) -> 'ViewRenderer':
        return self._set_engine_option('compile_dir', path)

    def set_force_compile(self, force_compile: bool) -> 'ViewRenderer':
        return self._set_engine_option('force_compile', force_compile)

    def set_config_dir(self, path: str) -> 'ViewRenderer':
        return self._set_engine_option('config_dir', path)

    def register_plugin(self, type: Union[PluginType, str], name: str, callback: Callable,
                        cacheable: bool = True, cache_attrs: Any = None) -> 'ViewRenderer':
        """Queue a plugin for registration when the engine is created"""
        if not callable(callback):
            raise ConfigurationError(f"Plugin '{name}' not callable")
        if cacheable and cache_attrs:
            raise ConfigurationError(
                f"Cannot set caching attributes for plugin '{name}' when it is cacheable."
            )

        plugin = PluginRegistration(PluginType(type), name, callback, cacheable, cache_attrs)
        self._plugins.append(plugin)
        if self._engine is not None:
            self._engine.register_plugin(plugin.type, plugin.name, plugin.callback,
                                         plugin.cacheable, plugin.cache_attrs)
        return self

    @property
    def registered_plugins(self) -> List[PluginRegistration]:
        return list(self._plugins)

    # Variables and content

    def set_template(self, filename: str = '') -> 'ViewRenderer':
        self.template_file = filename or ''
        return self

    def assign(self, key: Union[str, Mapping[str, Any]], value: Any = None) -> None:
        """Assign one variable, or every item of a mapping"""
        if isinstance(key, Mapping):
            for k, v in key.items():
                self.assign(k, v)
        else:
            self.template_vars[key] = value

    def assign_raw(self, content: str) -> None:
        self.raw_content = content
        self.set_render_type(RenderType.RAW)

    def assign_json(self, data: Mapping[str, Any]) -> None:
        for key, value in data.items():
            self.assign(key, value)
        self.set_render_type(RenderType.JSON)

    def set_render_type(self, render_type: Union[RenderType, str]) -> None:
        self.render_type = RenderType(render_type)

    def get_template_vars(self, name: Optional[str] = None) -> Any:
        """All variables, or one by name ('' when missing)"""
        if name:
            return self.template_vars.get(name, '')
        return dict(self.template_vars)

    def clean(self, clear_cache: bool = True) -> bool:
        self.template_vars = {}

        if not clear_cache:
            return True

        if self._engine is not None:
            for name in self._engine.get_template_vars():
                self._engine.clear_cache(name)
            self._engine.clear_all_cache()
            self._engine.clear_all_assign()

        return True

    # Redirects

    def set_redirect_options(self, uri: str = '/', code: int = 302) -> 'ViewRenderer':
        self._redirect_options = {'uri': uri, 'code': code}
        return self

    def is_redirect(self) -> bool:
        return self._redirect_options is not None

    def make_redirect(self, uri: Optional[str] = None, code: Optional[int] = None,
                      replace_headers: bool = True) -> Union[Redirect, bool]:
        """
        Resolve a redirect from arguments or stored options.

        Returns False when there is nowhere to go. Otherwise the Location
        header is recorded and a Redirect is returned; the caller must stop
        handling the request and send the response. A missing status code
        means 302, not 200, so the Location header is followed by clients.
        """
        options = self._redirect_options or {}
        target = options.get('uri') if uri is None else uri
        status = options.get('code') if code is None else code

        if not target:
            return False
        if not status:
            status = 302

        location = absolute_url(target, self.request)
        self.headers.emit(HeaderLine('Location', location, replace_headers, status))
        logger.info(f"Redirect {status} to {location}")
        return Redirect(location, status, replace_headers)

    # Rendering

    def _render_template(self) -> str:
        engine = self.ensure_engine()
        for key, value in self.template_vars.items():
            engine.assign(key, value)
        if not self.template_file:
            return ''
        return engine.fetch(self.template_file)

    def _render_json(self) -> str:
        try:
            return json.dumps(
                self.template_vars,
                indent=self.template_options.json_indent,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize template variables: {e}") from e

    def render(self, send_header: bool = True, clean: bool = False) -> Optional[str]:
        """Produce the response body for the current render type"""
        content = None
        render_type = self.render_type

        if render_type is RenderType.REDIRECT:
            send_header = False
        elif render_type is RenderType.JSON:
            content = self._render_json()
        elif render_type is RenderType.RAW:
            content = self.raw_content
        elif render_type is RenderType.JS:
            content = self.raw_content
            send_header = True
        elif render_type is RenderType.NOT_FOUND:
            send_header = True
            content = self._render_template()
        else:
            content = self._render_template()

        if send_header:
            self.send_headers(render_type)

        if clean:
            self.clean()

        return content

    def send_headers(self, render_type: Union[RenderType, str, None] = None,
                     custom_headers: Sequence[HeaderLine] = ()) -> None:
        key = render_type.value if isinstance(render_type, RenderType) else render_type
        lines = headers_for(key)
        if lines:
            # each table entry sets the status afresh; 404 carries its own code
            self.headers.status_code = 200
        self.headers.emit_all(lines)
        self.headers.emit_all(HeaderLine(*header) for header in custom_headers)


__all__ = ['Redirect', 'ViewRenderer']
