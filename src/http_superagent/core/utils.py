"""
Utility functions for http-superagent.

Includes:
- URL splitting / joining and query multimap encoding
- Duration formatting for the timing middleware
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

QueryValues = Dict[str, List[str]]


def split_url(url: str) -> Tuple[str, QueryValues]:
    """
    Split URL into the part without query string and its query multimap.

    Fragment is dropped: it is never sent to the server.

    Examples:
        >>> split_url("http://localhost:8080/search?q=a&q=b&page=1")
        ('http://localhost:8080/search', {'q': ['a', 'b'], 'page': ['1']})
    """
    parts = urlsplit(url.strip())
    queries: QueryValues = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        queries.setdefault(key, []).append(value)

    base = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
    return base, queries


def encode_queries(queries: Mapping[str, Iterable[str]]) -> str:
    """
    Encode query multimap as ``key=value`` pairs sorted by key.

    Values keep their insertion order inside one key.

    Examples:
        >>> encode_queries({"b": ["2"], "a": ["1", "x y"]})
        'a=1&a=x+y&b=2'
    """
    pairs = []
    for key in sorted(queries):
        for value in queries[key]:
            pairs.append((key, value))
    return urlencode(pairs)


def with_query(url: str, queries: Mapping[str, Iterable[str]]) -> str:
    """Replace URL query string with the encoded multimap."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, encode_queries(queries), ""))


def join_url(base_url: Optional[str], endpoint: str) -> str:
    """
    Строит полный URL из base_url и endpoint.

    Examples:
        >>> join_url("https://api.example.com", "/users")
        'https://api.example.com/users'
        >>> join_url("https://api.example.com", "https://other.com/x")
        'https://other.com/x'
    """
    if endpoint.startswith(("http://", "https://")) or not base_url:
        return endpoint

    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


def url_host(url: str) -> str:
    """Host component of the URL including port (``localhost:8080``)."""
    return urlsplit(url).netloc.rpartition("@")[2]


def url_scheme(url: str) -> str:
    return urlsplit(url).scheme.lower()


def format_duration(seconds: Union[int, float]) -> str:
    """
    Format elapsed time with the largest unit that keeps it >= 1.

    Examples:
        >>> format_duration(1.5)
        '1.5s'
        >>> format_duration(0.0123456)
        '12.3456ms'
        >>> format_duration(0.0000042)
        '4.2µs'
    """
    if seconds < 0:
        seconds = 0.0

    if seconds >= 1:
        value, unit = seconds, "s"
    elif seconds >= 1e-3:
        value, unit = seconds * 1e3, "ms"
    elif seconds >= 1e-6:
        value, unit = seconds * 1e6, "µs"
    else:
        value, unit = seconds * 1e9, "ns"

    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{text}{unit}"
