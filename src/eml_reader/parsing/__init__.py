# MIME message parsing module

from .decoder import decode_base64, decode_body, decode_quoted_printable
from .media_type import parse_media_type
from .reader import MessageReader, parse_eml_bytes, parse_eml_file, read_message

__all__ = [
    "MessageReader",
    "read_message",
    "parse_eml_bytes",
    "parse_eml_file",
    "parse_media_type",
    "decode_body",
    "decode_base64",
    "decode_quoted_printable",
]
