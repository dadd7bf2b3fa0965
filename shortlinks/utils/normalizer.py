"""URL normalization utility

Every URL is canonicalized before it is looked up or stored, so that
`Example.com/page`, `http://example.com:80/page` and
`HTTP://EXAMPLE.COM/./page` all map to the same shortened link.

Functions:
    normalize_url(raw: str) -> str:
        Return the canonical absolute form of a raw URL string.

Example:
    >>> from shortlinks.utils import normalize_url
    >>> normalize_url('  Example.COM:80/a/../page ')
    'http://example.com/page'
"""

import re
from urllib.parse import urlsplit, urlunsplit

from shortlinks.constants import URL
from shortlinks.exceptions import InvalidInputError, MalformedUrlError


HAS_PROTOCOL = re.compile(r'\Ahttps?://', re.IGNORECASE)
# Characters a URI can never carry unescaped (RFC 3986 section 2)
UNSAFE_CHARS = re.compile(r'[\x00-\x20\x7f<>"{}|\\^`]')


def _remove_dot_segments(path: str) -> str:
    """Resolve '.' and '..' segments of an absolute path (RFC 3986 section 5.2.4)."""
    if '.' not in path:
        return path

    output = []
    segments = path.split('/')
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        if segment == '.':
            if last:
                output.append('')
        elif segment == '..':
            if len(output) > 1:
                output.pop()
            if last:
                output.append('')
        else:
            output.append(segment)

    normalized = '/'.join(output)
    return normalized if normalized.startswith('/') else '/' + normalized


def normalize_url(raw: str) -> str:
    """Canonicalize a raw URL string into a comparable absolute URL.

    Steps:
        1. Reject blank input.
        2. Strip surrounding whitespace.
        3. Prepend 'http://' unless the URL starts with http:// or https://
           (case-insensitive).
        4. Lowercase scheme and host, drop the scheme's default port, turn an
           empty path into '/', and resolve dot segments in the path.
           Userinfo, query and fragment are kept as given.

    Args:
        raw (str):
            URL as supplied by the caller.

    Returns:
        str: The normalized absolute URL.

    Raises:
        InvalidInputError:
            If `raw` is not a string or is empty/whitespace-only.
        MalformedUrlError:
            If the URL cannot be parsed after step 3.

    Example:
        >>> normalize_url('example.com/page')
        'http://example.com/page'
        >>> normalize_url('HTTPS://Example.com:443')
        'https://example.com/'
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInputError(f'URL must be a non-blank string (given value: {raw!r}).')

    url = raw.strip()
    if not HAS_PROTOCOL.match(url):
        url = f'{URL.DEFAULT_SCHEME}://{url}'

    if UNSAFE_CHARS.search(url):
        raise MalformedUrlError(f'URL contains characters that must be escaped: {url!r}.')

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise MalformedUrlError(f'Cannot parse URL {url!r}: {e}.') from e

    host = parts.hostname
    if not host:
        raise MalformedUrlError(f'URL has no host: {url!r}.')

    scheme = parts.scheme.lower()

    # urlsplit() lowercases hostname but drops IPv6 brackets
    netloc = f'[{host}]' if ':' in host else host
    if port is not None and port != URL.DEFAULT_PORTS[scheme]:
        netloc = f'{netloc}:{port}'
    userinfo, at, _ = parts.netloc.rpartition('@')
    if at:
        netloc = f'{userinfo}@{netloc}'

    path = _remove_dot_segments(parts.path) or '/'

    return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))
