"""
Media type parsing for Content-Type and Content-Disposition values.

Parses ``type/subtype; key=value; key="quoted value"`` into a ParsedMediaType,
including RFC 2231 extended and continued parameters. A bare token such as
``inline`` or ``attachment`` is accepted so the same parser serves
Content-Disposition.
"""

from email import utils
from typing import Dict, List, Optional, Tuple

from ..models.message import ParsedMediaType

_TSPECIALS = set('()<>@,;:\\"/[]?=')


def _is_token_char(char: str) -> bool:
    return 32 < ord(char) < 127 and char not in _TSPECIALS


def _consume_token(value: str) -> Tuple[str, str]:
    end = 0
    while end < len(value) and _is_token_char(value[end]):
        end += 1
    return value[:end], value[end:]


def _consume_value(value: str) -> Tuple[str, str]:
    """Consume a token or a quoted string; an empty result means nothing was consumed."""
    if not value.startswith('"'):
        return _consume_token(value)

    chars = []
    i = 1
    while i < len(value):
        char = value[i]
        if char == '"':
            return "".join(chars), value[i + 1:]
        if char == "\\" and i + 1 < len(value) and value[i + 1] in _TSPECIALS:
            chars.append(value[i + 1])
            i += 2
            continue
        if char in "\r\n":
            return "", value
        chars.append(char)
        i += 1

    # Unterminated quoted string
    return "", value


def _consume_param(value: str) -> Tuple[Optional[str], str, str]:
    rest = value.lstrip()
    if not rest.startswith(";"):
        return None, "", value

    rest = rest[1:].lstrip()
    key, rest = _consume_token(rest)
    if not key:
        return None, "", value

    rest = rest.lstrip()
    if not rest.startswith("="):
        return None, "", value

    rest = rest[1:].lstrip()
    param_value, remaining = _consume_value(rest)
    if not param_value and remaining == rest:
        return None, "", value

    return key.lower(), param_value, remaining


def _check_media_type(media_type: str) -> None:
    main_type, rest = _consume_token(media_type)
    if not main_type:
        raise ValueError("no media type")
    if not rest:
        return
    if not rest.startswith("/"):
        raise ValueError("expected slash after first token")
    sub_type, rest = _consume_token(rest[1:])
    if not sub_type:
        raise ValueError("expected token after slash")
    if rest:
        raise ValueError("unexpected content after media subtype")


def _decode_extended(extended: Dict[str, Dict[str, str]]) -> Dict[str, str]:
    """Assemble RFC 2231 ``name*``, ``name*0*`` and ``name*1`` pieces into plain values."""
    pairs: List[Tuple[str, str]] = [("", "")]
    for base, pieces in extended.items():
        single = f"{base}*"
        if single in pieces:
            pieces = {single: pieces[single]}
        # email.utils expects quoted values and unquotes them itself
        pairs.extend((name, '"%s"' % utils.quote(value)) for name, value in pieces.items())

    decoded: Dict[str, str] = {}
    for name, value in utils.decode_params(pairs)[1:]:
        if isinstance(value, tuple):
            charset, language, text = value
            value = (charset, language, utils.unquote(text))
        decoded[name] = utils.collapse_rfc2231_value(value)
    return decoded


def parse_media_type(value: str) -> ParsedMediaType:
    """
    Parse a media type header value.

    Args:
        value: Raw Content-Type or Content-Disposition value

    Returns:
        ParsedMediaType with lower-cased media type and parameter names

    Raises:
        ValueError: If the value is empty or malformed
    """
    base, sep, rest = value.partition(";")
    media_type = base.strip().lower()
    _check_media_type(media_type)

    params: Dict[str, str] = {}
    extended: Dict[str, Dict[str, str]] = {}

    remaining = sep + rest
    while remaining:
        remaining = remaining.lstrip()
        if not remaining:
            break

        key, param_value, rest_after = _consume_param(remaining)
        if key is None:
            # Ignore a trailing semicolon
            if remaining.strip() == ";":
                break
            raise ValueError("invalid media parameter")

        target = params
        if "*" in key:
            base_name = key.split("*", 1)[0]
            target = extended.setdefault(base_name, {})

        if key in target:
            raise ValueError(f"duplicate parameter name {key!r}")

        target[key] = param_value
        remaining = rest_after

    params.update(_decode_extended(extended))

    return ParsedMediaType(media_type=media_type, params=params)
