"""eml_reader - decode raw RFC 822/MIME messages into structured Python objects.

The reader walks nested multipart bodies, decodes transfer encodings and files
each leaf part as a textual body, an attachment or an embedded file.
"""

__version__ = "0.1.0"

from eml_reader.config import Settings, get_settings
from eml_reader.exceptions import (
    BlankFilenameError,
    BodyDecodeError,
    InvalidDispositionError,
    InvalidMediaTypeError,
    MalformedEnvelopeError,
    MaxDepthExceededError,
    MimeReadError,
    MultipartError,
    UnknownEncodingError,
)
from eml_reader.models import (
    Attachment,
    EmbeddedFile,
    File,
    Message,
    ParsedMediaType,
    Part,
    TransferEncoding,
)
from eml_reader.parsing import MessageReader, parse_eml_bytes, parse_eml_file, read_message

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "Message",
    "Part",
    "File",
    "Attachment",
    "EmbeddedFile",
    "ParsedMediaType",
    "TransferEncoding",
    "MessageReader",
    "read_message",
    "parse_eml_bytes",
    "parse_eml_file",
    "MimeReadError",
    "MalformedEnvelopeError",
    "InvalidMediaTypeError",
    "InvalidDispositionError",
    "BlankFilenameError",
    "UnknownEncodingError",
    "BodyDecodeError",
    "MultipartError",
    "MaxDepthExceededError",
]
