# Data models for the MIME message reader

from .message import (
    Attachment,
    EmbeddedFile,
    File,
    Message,
    ParsedMediaType,
    Part,
    TransferEncoding,
)

__all__ = [
    "Message",
    "Part",
    "File",
    "Attachment",
    "EmbeddedFile",
    "ParsedMediaType",
    "TransferEncoding",
]
