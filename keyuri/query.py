"""
Minimal query-string splitter for otpauth URIs.

This is deliberately naive: pairs are split on ``&`` and then on the first
``=``, and values are percent-decoded.  It does not try to cope with every
RFC 3986 corner case (for instance a raw ``&`` inside a value), and it never
rejects input.
"""

import urllib.parse
from typing import Dict, Optional


def parse_query_string(query: str) -> Dict[str, Optional[str]]:
    """
    Split a query string into a key → value mapping.

    A single leading ``?`` is dropped; any other ``?`` is kept as part of
    its key or value.  A pair without ``=`` maps its key to None, which
    keeps "given without a value" apart from "given as empty".  When a key is
    repeated only its first occurrence is kept.

    Args:
        query: Raw query string, with or without the leading ``?``.

    Returns:
        Dict of raw keys to percent-decoded values (or None).
    """
    result: Dict[str, Optional[str]] = {}
    if not query:
        return result

    if query.startswith("?"):
        query = query[1:]

    for pair in query.split("&"):
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        # first one wins
        if key in result:
            continue
        result[key] = urllib.parse.unquote(value) if sep else None

    return result
