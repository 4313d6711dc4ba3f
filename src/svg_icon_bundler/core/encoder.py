"""Data URI encoding for optimized SVG markup.

Uses a single, fully reversible escaping rule: standard percent-encoding of
the UTF-8 bytes of every character except ASCII letters, digits and
``DATA_URI_SAFE_CHARS``. ``%``, ``#``, both quote characters, ``<``, ``>``
and ``&`` are therefore always escaped, which makes the payload safe inside
a URI and inside any quoted string literal.
"""

from urllib.parse import quote, unquote

from svg_icon_bundler.constants import DATA_URI_PREFIX, DATA_URI_SAFE_CHARS
from svg_icon_bundler.exceptions import InvalidDataURIError


def encode(optimized_markup: str) -> str:
    """Encode SVG markup as a ``data:image/svg+xml`` URI.

    Args:
        optimized_markup: Markup to embed, usually the optimizer's output.

    Returns:
        The data URI.
    """
    payload = quote(
        optimized_markup, safe=DATA_URI_SAFE_CHARS, encoding="utf-8", errors="surrogatepass"
    )
    return f"{DATA_URI_PREFIX}{payload}"


def decode(data_uri: str) -> str:
    """Recover the markup embedded by :func:`encode`.

    Args:
        data_uri: A data URI produced by :func:`encode`.

    Returns:
        The original markup.

    Raises:
        InvalidDataURIError: If the URI does not start with the SVG data URI prefix.
    """
    if not data_uri.startswith(DATA_URI_PREFIX):
        raise InvalidDataURIError(
            "Missing SVG data URI prefix",
            {"expected_prefix": DATA_URI_PREFIX, "received": data_uri[:40]},
        )
    payload = data_uri[len(DATA_URI_PREFIX) :]
    return unquote(payload, encoding="utf-8", errors="surrogatepass")
