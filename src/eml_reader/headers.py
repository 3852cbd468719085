"""
Header mapping helpers.

A header mapping is a dict from canonical field name to the ordered list of
values seen for that field. Every copy helper returns fresh value lists so that
mutating a copy never leaks into the source mapping.
"""

from typing import Dict, Iterable, List

Headers = Dict[str, List[str]]

_TOKEN_SPECIALS = set('()<>@,;:\\"/[]?= ')


def _is_valid_header_char(char: str) -> bool:
    return 32 < ord(char) < 127 and char not in _TOKEN_SPECIALS


def canonical_header_key(name: str) -> str:
    """
    Return the canonical form of a header field name.

    The first letter and any letter following a hyphen are upper-cased, the rest
    lower-cased ("content-type" -> "Content-Type", "MIME-Version" -> "Mime-Version").
    Names containing characters outside the token set are returned unchanged.

    Args:
        name: Header field name as found on the wire

    Returns:
        Canonical header field name
    """
    if not name or not all(_is_valid_header_char(c) for c in name):
        return name

    chars = []
    upper = True
    for c in name:
        chars.append(c.upper() if upper else c.lower())
        upper = c == "-"
    return "".join(chars)


def get_header(headers: Headers, name: str) -> List[str]:
    """Return all values for a header, or an empty list."""
    return list(headers.get(canonical_header_key(name), []))


def get_header_value(headers: Headers, name: str) -> str:
    """Return the first value for a header, or an empty string."""
    values = headers.get(canonical_header_key(name))
    return values[0] if values else ""


def copy_headers(headers: Headers) -> Headers:
    """Create a new header mapping by copying every field of another."""
    return {name: list(values) for name, values in headers.items()}


def copy_headers_replace(headers: Headers, replace: Headers) -> Headers:
    """Create a new header mapping by copying another, replacing some fields."""
    result = copy_headers(headers)
    for name, values in replace.items():
        result[name] = list(values)
    return result


def copy_only_headers(headers: Headers, keys: Iterable[str]) -> Headers:
    """
    Create a new header mapping holding only the listed fields.

    Args:
        headers: Source header mapping
        keys: Field names to keep (looked up in canonical form)

    Returns:
        New header mapping with the listed fields that were present
    """
    result: Headers = {}
    for key in keys:
        canonical = canonical_header_key(key)
        if canonical in headers:
            result[canonical] = list(headers[canonical])
    return result
