"""
Flash messages

Messages live in three generations:
- from previous request: loaded from the session slot at construction
- for now: visible to the current request only, never persisted
- for next request: written to the session slot

Constructing a store rotates the generations: whatever the previous
request queued becomes read-only history and the slot is emptied.
"""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from presenter.config import FlashConfig
from presenter.exceptions import ConfigurationError, InvalidArgumentError
from presenter.session import get_current_session

if TYPE_CHECKING:
    from presenter.templating.renderer import ViewRenderer

logger = logging.getLogger(__name__)


def _as_list(values: Any) -> List[Any]:
    """Copy a stored message sequence; a lone value becomes a one-item list"""
    if isinstance(values, (list, tuple)):
        return list(values)
    return [values]


class FlashStore:
    """Flash message store backed by a session-like mapping"""

    def __init__(self, storage: Optional[MutableMapping] = None, storage_key: Optional[str] = None):
        if isinstance(storage_key, str) and storage_key:
            self.storage_key = storage_key
        else:
            self.storage_key = FlashConfig().storage_key

        if storage is None:
            storage = get_current_session()
            if storage is None:
                raise ConfigurationError("Flash messages failed: session not found")
        elif not isinstance(storage, MutableMapping):
            raise InvalidArgumentError(
                f"Flash messages storage must be a mutable mapping, got {type(storage).__name__}"
            )

        self.storage = storage
        self.from_previous: Dict[str, List[Any]] = {}
        self.for_now: Dict[str, List[Any]] = {}

        previous = self.storage.get(self.storage_key)
        if isinstance(previous, Mapping):
            self.from_previous = {key: _as_list(values) for key, values in previous.items()}
        self.storage[self.storage_key] = {}

        logger.debug(f"Loaded {len(self.from_previous)} flash keys from '{self.storage_key}'")

    def _slot(self) -> Dict[str, List[Any]]:
        slot = self.storage.get(self.storage_key)
        return dict(slot) if isinstance(slot, Mapping) else {}

    def add_message(self, key: str, message: Any) -> None:
        """Add a flash message for the next request"""
        slot = self._slot()
        slot[key] = _as_list(slot.get(key, [])) + [message]
        # reassign so sessions tracking __setitem__ see the change
        self.storage[self.storage_key] = slot

    def add_message_now(self, key: str, message: Any) -> None:
        """Add a flash message for the current request"""
        self.for_now.setdefault(key, []).append(message)

    def get_messages(self) -> Dict[str, List[Any]]:
        """Messages to show for the current request"""
        messages = {key: list(values) for key, values in self.from_previous.items()}
        for key, values in self.for_now.items():
            messages.setdefault(key, []).extend(values)
        return messages

    def get_message(self, key: str, default: Any = None) -> Any:
        return self.get_messages().get(key, default)

    def get_first_message(self, key: str, default: Any = None) -> Any:
        messages = self.get_message(key)
        if messages:
            return messages[0]
        return default

    def has_message(self, key: str) -> bool:
        return key in self.get_messages()

    def clear_messages(self) -> None:
        """Clear all messages"""
        if self.storage_key in self.storage:
            self.storage[self.storage_key] = {}
        self.from_previous = {}
        self.for_now = {}

    def clear_message(self, key: str) -> None:
        """Clear messages under a single key"""
        slot = self.storage.get(self.storage_key)
        if isinstance(slot, Mapping) and key in slot:
            slot = dict(slot)
            del slot[key]
            self.storage[self.storage_key] = slot

        self.from_previous.pop(key, None)
        self.for_now.pop(key, None)


# Process-wide store: created on first access, lives for the process, no teardown
_flash_store: Optional[FlashStore] = None


def init_flash_store(storage: Optional[MutableMapping] = None, storage_key: Optional[str] = None) -> FlashStore:
    """Create the process-wide flash store, replacing any previous one"""
    global _flash_store
    _flash_store = FlashStore(storage, storage_key)
    return _flash_store


def get_flash_store() -> FlashStore:
    """Get the process-wide flash store instance"""
    global _flash_store
    if _flash_store is None:
        _flash_store = FlashStore()
    return _flash_store


def install_flash_helpers(renderer: 'ViewRenderer', store: FlashStore) -> None:
    """Expose flash messages to templates as ``flash_messages`` and ``flash_first``"""
    from presenter.templating.types import PluginType

    def flash_messages(key: Optional[str] = None):
        if key is None:
            return store.get_messages()
        return store.get_message(key, [])

    def flash_first(key: str, default: Any = None):
        return store.get_first_message(key, default)

    renderer.register_plugin(PluginType.FUNCTION, 'flash_messages', flash_messages)
    renderer.register_plugin(PluginType.FUNCTION, 'flash_first', flash_first)


__all__ = ['FlashStore', 'init_flash_store', 'get_flash_store', 'install_flash_helpers']
