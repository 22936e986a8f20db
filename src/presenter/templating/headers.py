"""
Response header table and collector.

Headers are not sent by this package. They are collected in order on a
``Headers`` instance which the host framework copies onto its response.
"""

import logging
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)


class HeaderLine(NamedTuple):
    """A header to emit; a non-zero code also sets the response status"""
    name: str
    value: str
    replace: bool = True
    code: int = 0


HEADERS: Dict[str, Tuple[HeaderLine, ...]] = {
    "_": (
        HeaderLine("Content-Type", "text/html; charset=utf-8"),
    ),
    "html": (
        HeaderLine("Content-Type", "text/html; charset=utf-8"),
    ),
    "json": (
        HeaderLine("Content-Type", "application/json; charset=utf-8"),
    ),
    "raw": (
        HeaderLine("Content-Type", "text/plain; charset=utf-8"),
    ),
    "js": (
        HeaderLine("Content-Type", "text/javascript; charset=utf-8"),
    ),
    "404": (
        HeaderLine("Content-Type", "text/html; charset=utf-8", True, 404),
    ),
    "redirect": (),
}


def headers_for(render_type: Optional[str]) -> Tuple[HeaderLine, ...]:
    """Look up the header set for a render type, falling back to the default entry"""
    if not render_type:
        return ()
    return HEADERS.get(render_type, HEADERS["_"])


class Headers:
    """Ordered header collector"""

    def __init__(self):
        self._lines: List[Tuple[str, str]] = []
        self.status_code = 200

    def emit(self, line: HeaderLine) -> None:
        if line.replace:
            lowered = line.name.lower()
            self._lines = [(n, v) for n, v in self._lines if n.lower() != lowered]
        self._lines.append((line.name, line.value))
        if line.code:
            self.status_code = line.code
        logger.debug(f"Header {line.name}: {line.value}")

    def emit_all(self, lines: Iterable[HeaderLine]) -> None:
        for line in lines:
            self.emit(line)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Value of the last header with this name"""
        lowered = name.lower()
        for header_name, value in reversed(self._lines):
            if header_name.lower() == lowered:
                return value
        return default

    def items(self) -> List[Tuple[str, str]]:
        return list(self._lines)

    def clear(self) -> None:
        self._lines = []
        self.status_code = 200

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"Headers(status_code={self.status_code}, lines={self._lines!r})"


__all__ = ['HeaderLine', 'HEADERS', 'Headers', 'headers_for']
