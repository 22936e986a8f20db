"""
Request helpers used when building redirect URLs.

The request is a WSGI style environ mapping.
"""

from typing import Any, Mapping


def is_ssl(environ: Mapping[str, Any]) -> bool:
    """Guess whether the current request came in over TLS"""
    https = str(environ.get('HTTPS', '')).lower()
    if https in ('on', '1'):
        return True
    if str(environ.get('SERVER_PORT', '')) == '443':
        return True
    if str(environ.get('HTTP_X_FORWARDED_PROTO', '')).lower() == 'https':
        return True
    return str(environ.get('wsgi.url_scheme', '')).lower() == 'https'


def request_scheme(environ: Mapping[str, Any]) -> str:
    return 'https' if is_ssl(environ) else 'http'


def request_host(environ: Mapping[str, Any]) -> str:
    host = environ.get('HTTP_HOST') or environ.get('SERVER_NAME')
    return host or 'localhost'


def is_absolute_url(uri: str) -> bool:
    return uri.startswith(('http://', 'https://'))


def absolute_url(uri: str, environ: Mapping[str, Any]) -> str:
    """Expand a relative URI against the request's scheme and host"""
    if is_absolute_url(uri):
        return uri
    return f"{request_scheme(environ)}://{request_host(environ)}{uri}"


__all__ = ['is_ssl', 'request_scheme', 'request_host', 'is_absolute_url', 'absolute_url']
