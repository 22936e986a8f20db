"""
Presenter Configuration

Dataclass based settings for flash messages and template rendering.
Defaults are read from environment variables when an object is created,
so a process can be reconfigured without touching code.
"""

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional, Union

from presenter.exceptions import ConfigurationError


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    return value if value else default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    return value.lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def _from_mapping(cls, options: Mapping[str, Any], aliases: Mapping[str, str]):
    known = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in options.items():
        name = aliases.get(key, key)
        if name not in known:
            raise ConfigurationError(f"Unknown {cls.__name__} option: {key!r}")
        kwargs[name] = value
    return cls(**kwargs)


@dataclass
class FlashConfig:
    """Flash message configuration"""
    storage_key: str = field(default_factory=lambda: _env_str('PRESENTER_FLASH_KEY', 'flash'))


@dataclass
class EngineOptions:
    """Template engine options captured for deferred initialization"""
    template_dir: Optional[str] = field(default_factory=lambda: _env_str('PRESENTER_TEMPLATE_DIR'))
    compile_dir: Optional[str] = field(default_factory=lambda: _env_str('PRESENTER_COMPILE_DIR'))
    config_dir: Optional[str] = field(default_factory=lambda: _env_str('PRESENTER_CONFIG_DIR'))
    force_compile: bool = field(default_factory=lambda: _env_bool('PRESENTER_FORCE_COMPILE', False))
    auto_escape: bool = field(default_factory=lambda: _env_bool('PRESENTER_AUTO_ESCAPE', True))

    @classmethod
    def from_mapping(cls, options: Union['EngineOptions', Mapping[str, Any], None]) -> 'EngineOptions':
        """Build options from a mapping; an existing instance is copied"""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return replace(options)
        return _from_mapping(cls, options, {
            'setTemplateDir': 'template_dir',
            'setCompileDir': 'compile_dir',
            'setConfigDir': 'config_dir',
            'setForceCompile': 'force_compile',
        })


@dataclass
class TemplateOptions:
    """Per-renderer template options"""
    file: str = ''
    json_indent: Optional[int] = field(default_factory=lambda: _env_int('PRESENTER_JSON_INDENT', 4))

    @classmethod
    def from_mapping(cls, options: Union['TemplateOptions', Mapping[str, Any], None]) -> 'TemplateOptions':
        if options is None:
            return cls()
        if isinstance(options, cls):
            return replace(options)
        return _from_mapping(cls, options, {'source': 'file'})


@dataclass
class PresenterConfig:
    """Aggregate configuration"""
    flash: FlashConfig = field(default_factory=FlashConfig)
    engine: EngineOptions = field(default_factory=EngineOptions)
    template: TemplateOptions = field(default_factory=TemplateOptions)


def load_config() -> PresenterConfig:
    """Load configuration from the environment"""
    return PresenterConfig()


__all__ = [
    'FlashConfig', 'EngineOptions', 'TemplateOptions', 'PresenterConfig',
    'load_config'
]
