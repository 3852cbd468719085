"""
Transfer-encoding decoding for multipart leaf bodies.
"""

import base64
import binascii
import quopri
import re

from ..exceptions import BodyDecodeError, UnknownEncodingError
from ..models.message import TransferEncoding

# Labels whose bodies are already plain bytes at this layer. Quoted-printable is
# decoded by the multipart walker when the part is read.
PASSTHROUGH_ENCODINGS = frozenset(
    {
        "",
        "7bit",
        "binary",
        TransferEncoding.UNENCODED.value,
        TransferEncoding.QUOTED_PRINTABLE.value,
    }
)

_BASE64_WHITESPACE_RE = re.compile(rb"[\r\n]")


def normalize_encoding(encoding: str) -> str:
    """Return a transfer-encoding label in comparable form."""
    return encoding.strip().lower()


def decode_base64(data: bytes) -> bytes:
    """
    Decode standard base64, ignoring line breaks.

    Args:
        data: Encoded body bytes

    Returns:
        Decoded bytes

    Raises:
        BodyDecodeError: If the data contains invalid characters or padding
    """
    try:
        return base64.b64decode(_BASE64_WHITESPACE_RE.sub(b"", data), validate=True)
    except binascii.Error as e:
        raise BodyDecodeError(f"Corrupt base64 body: {e}") from e


def decode_quoted_printable(data: bytes) -> bytes:
    return quopri.decodestring(data)


def decode_body(data: bytes, encoding: str) -> bytes:
    """
    Decode a part body according to its Content-Transfer-Encoding.

    Args:
        data: Body bytes as read from the part
        encoding: Content-Transfer-Encoding label ("" when absent)

    Returns:
        Decoded body bytes

    Raises:
        BodyDecodeError: If a base64 body is corrupt
        UnknownEncodingError: If the label is not supported
    """
    label = normalize_encoding(encoding)
    if label == TransferEncoding.BASE64.value:
        return decode_base64(data)
    if label in PASSTHROUGH_ENCODINGS:
        return data
    raise UnknownEncodingError(encoding)
