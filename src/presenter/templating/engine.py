"""
Jinja2 adapter implementing the template engine contract used by ViewRenderer:
directories, force compile, variable assignment, plugin registration,
fetch by name and cache clearing.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import jinja2

from presenter.config import EngineOptions
from presenter.exceptions import ConfigurationError
from presenter.templating.types import PluginType

logger = logging.getLogger(__name__)


@dataclass
class PluginRegistration:
    """A plugin queued for, or applied to, an engine"""
    type: PluginType
    name: str
    callback: Callable
    cacheable: bool = True
    cache_attrs: Any = None


class TemplateEngine:
    """Jinja2 based template engine"""

    def __init__(self, options: Optional[EngineOptions] = None):
        self.options = options or EngineOptions()
        self._vars: Dict[str, Any] = {}
        self.plugins: Dict[Tuple[PluginType, str], PluginRegistration] = {}

        self.bytecode_cache = None
        if self.options.compile_dir and not self.options.force_compile:
            os.makedirs(self.options.compile_dir, exist_ok=True)
            self.bytecode_cache = jinja2.FileSystemBytecodeCache(self.options.compile_dir)

        self.environment = jinja2.Environment(
            loader=jinja2.FileSystemLoader(self._search_path()),
            autoescape=self.options.auto_escape,
            bytecode_cache=self.bytecode_cache,
            cache_size=0 if self.options.force_compile else 400,
            auto_reload=True,
            undefined=jinja2.Undefined,
        )

    def _search_path(self) -> List[str]:
        paths = [p for p in (self.options.template_dir, self.options.config_dir) if p]
        return paths or [os.getcwd()]

    def assign(self, name: str, value: Any) -> None:
        self._vars[name] = value

    def get_template_vars(self) -> Dict[str, Any]:
        return dict(self._vars)

    def register_plugin(self, type: Union[PluginType, str], name: str, callback: Callable,
                        cacheable: bool = True, cache_attrs: Any = None) -> None:
        """Register a function, filter (modifier) or test with the environment"""
        plugin_type = PluginType(type)
        if (plugin_type, name) in self.plugins:
            raise ConfigurationError(f"Plugin tag '{name}' already registered")

        if plugin_type is PluginType.FUNCTION:
            self.environment.globals[name] = callback
        elif plugin_type is PluginType.MODIFIER:
            self.environment.filters[name] = callback
        else:
            self.environment.tests[name] = callback

        self.plugins[(plugin_type, name)] = PluginRegistration(
            plugin_type, name, callback, cacheable, cache_attrs
        )

    def fetch(self, name: str) -> str:
        """Render a template by name with the assigned variables"""
        return self.environment.get_template(name).render(self._vars)

    def clear_cache(self, name: str) -> None:
        """Drop a single template from the in-memory cache"""
        cache = self.environment.cache
        if cache is None:
            return
        for key in list(cache.keys()):
            if key[1] == name:
                del cache[key]

    def clear_all_cache(self) -> None:
        if self.environment.cache is not None:
            self.environment.cache.clear()
        if self.bytecode_cache is not None:
            self.bytecode_cache.clear()

    def clear_all_assign(self) -> None:
        self._vars.clear()


def create_engine(options: EngineOptions) -> TemplateEngine:
    """Engine factory used for deferred initialization"""
    engine = TemplateEngine(options)
    logger.info(f"Template engine created (template_dir={options.template_dir})")
    return engine


__all__ = ['PluginRegistration', 'TemplateEngine', 'create_engine']
