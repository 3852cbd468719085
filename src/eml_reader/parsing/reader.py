"""
MIME message reader.

Parses a raw RFC 822 message into a Message: envelope headers, textual body parts,
and the files the message carries. Multipart bodies are walked recursively; each
leaf part is decoded and filed as a Part (inside multipart/alternative) or as an
Attachment / EmbeddedFile.
"""

from email import errors as email_errors
from email.message import Message as EmailMessage
from email.parser import BytesParser
from email.policy import Policy, compat32
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..config import Settings, get_settings
from ..exceptions import (
    BlankFilenameError,
    InvalidDispositionError,
    InvalidMediaTypeError,
    MalformedEnvelopeError,
    MaxDepthExceededError,
    MimeReadError,
    MultipartError,
)
from ..headers import Headers, canonical_header_key, copy_only_headers, get_header_value
from ..logging_config import get_logger
from ..models.message import (
    Attachment,
    EmbeddedFile,
    Message,
    ParsedMediaType,
    Part,
    TransferEncoding,
)
from .decoder import decode_body, decode_quoted_printable, normalize_encoding
from .media_type import parse_media_type

logger = get_logger(__name__)

# Consumed into charset and part structure, never copied into Message.headers
RESERVED_HEADERS = frozenset({"Content-Type", "Mime-Version"})

SINGLE_PART_HEADERS = ["Content-Type", "Content-Transfer-Encoding"]

_ENVELOPE_DEFECTS = (
    email_errors.MissingHeaderBodySeparatorDefect,
    email_errors.FirstHeaderLineIsContinuationDefect,
)
_MULTIPART_DEFECTS = (
    email_errors.NoBoundaryInMultipartDefect,
    email_errors.StartBoundaryNotFoundDefect,
    email_errors.CloseBoundaryNotFoundDefect,
)

# Bodies carrying these labels are 7-bit text on the wire; the email package
# would decode them if asked for bytes
_LIBRARY_DECODED_ENCODINGS = frozenset(
    {"quoted-printable", "base64", "x-uuencode", "uuencode", "uue", "x-uue"}
)


def _serialize_policy(data: bytes) -> Policy:
    """Policy that writes embedded messages back with the input's line endings."""
    linesep = "\r\n" if b"\r\n" in data else "\n"
    return compat32.clone(linesep=linesep, max_line_length=None)


def _header_text(value: str) -> str:
    """Unfold a raw header value and recover non-ASCII bytes as UTF-8."""
    unfolded = " ".join(line.strip() for line in value.splitlines())
    return unfolded.strip().encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _collect_headers(entity: EmailMessage) -> Headers:
    headers: Headers = {}
    for name, value in entity.raw_items():
        headers.setdefault(canonical_header_key(name), []).append(_header_text(value))
    return headers


def _payload_bytes(entity: EmailMessage, policy: Policy) -> bytes:
    """Return the body of ``entity`` exactly as it was on the wire."""
    payload = entity.get_payload()
    if payload is None:
        return b""
    if isinstance(payload, list):
        # message/rfc822 and friends are parsed into sub-messages by the email package
        return b"".join(sub.as_bytes(policy=policy) for sub in payload)
    cte = str(entity.get("content-transfer-encoding", "")).lower()
    if cte in _LIBRARY_DECODED_ENCODINGS:
        return payload.encode("utf-8", "surrogateescape")
    # raw 8bit bytes, not transcoded through the part's charset
    return entity.get_payload(decode=True)


def _parse_content_type(value: str) -> ParsedMediaType:
    try:
        return parse_media_type(value)
    except ValueError as e:
        raise InvalidMediaTypeError(value, str(e)) from e


def _parse_disposition(value: str) -> ParsedMediaType:
    if not value.strip():
        return ParsedMediaType(media_type="")
    try:
        return parse_media_type(value)
    except ValueError as e:
        raise InvalidDispositionError(value, str(e)) from e


class MessageReader:
    """
    Reads raw RFC 822/MIME messages into Message instances.

    Defaults are held per reader instead of globally, so readers with different
    defaults can be used side by side.
    """

    def __init__(
        self,
        charset: str = "UTF-8",
        encoding: str = "quoted-printable",
        max_depth: int = 32,
    ) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.charset = charset
        self.encoding = encoding
        self.max_depth = max_depth

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "MessageReader":
        settings = settings or get_settings()
        return cls(
            charset=settings.default_charset,
            encoding=settings.default_encoding,
            max_depth=settings.max_multipart_depth,
        )

    def read_message(self, stream: BinaryIO, message: Message) -> int:
        """
        Parse a raw message from a binary stream into ``message``.

        The message is reset first. It is only populated when the whole stream
        parses; after an error it is left in its reset state.

        Args:
            stream: Binary file-like object positioned at the start of the message
            message: Message to fill

        Returns:
            Number of bytes consumed from the stream

        Raises:
            MimeReadError: On the first parsing failure anywhere in the message
            OSError: If reading the stream fails
        """
        message.reset(charset=self.charset, encoding=self.encoding)

        data = stream.read()
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("stream must be opened in binary mode")

        staged = Message(charset=self.charset, encoding=self.encoding)
        try:
            self._read_envelope(staged, bytes(data))
        except MimeReadError as e:
            logger.warning(
                "message_parse_failed",
                error_type=type(e).__name__,
                error=str(e),
                size_bytes=len(data),
            )
            raise

        message.headers = staged.headers
        message.charset = staged.charset
        message.parts = staged.parts
        message.attachments = staged.attachments
        message.embedded = staged.embedded

        logger.info(
            "message_parsed",
            size_bytes=len(data),
            charset=message.charset,
            parts_count=len(message.parts),
            attachments_count=len(message.attachments),
            embedded_count=len(message.embedded),
        )
        return len(data)

    def _read_envelope(self, message: Message, data: bytes) -> None:
        if not data.strip():
            raise MalformedEnvelopeError("Failed to parse message: empty input")

        try:
            envelope = BytesParser(policy=compat32).parsebytes(data)
        except Exception as e:
            raise MalformedEnvelopeError(f"Failed to parse message: {str(e)}") from e

        for defect in envelope.defects:
            if isinstance(defect, _ENVELOPE_DEFECTS):
                raise MalformedEnvelopeError(
                    f"Failed to parse message: {type(defect).__name__}"
                )

        envelope_headers = _collect_headers(envelope)
        policy = _serialize_policy(data)

        # copy headers, except Content-Type and Mime-Version
        for name, values in envelope_headers.items():
            if name not in RESERVED_HEADERS:
                message.headers[name] = list(values)

        content_type = _parse_content_type(get_header_value(envelope_headers, "Content-Type"))

        charset = content_type.params.get("charset")
        if charset is not None:
            message.charset = charset

        if content_type.is_multipart:
            self._parse_multipart(
                message,
                envelope,
                content_type.media_type,
                content_type.param("boundary"),
                depth=1,
                policy=policy,
            )
            return

        # single body, kept as it came off the wire
        encoding = get_header_value(envelope_headers, "Content-Transfer-Encoding")
        message.parts = [
            Part(
                media_type=content_type.media_type,
                headers=copy_only_headers(envelope_headers, SINGLE_PART_HEADERS),
                content=_payload_bytes(envelope, policy),
                encoding=encoding or None,
            )
        ]

    def _parse_multipart(
        self,
        message: Message,
        container: EmailMessage,
        media_type: str,
        boundary: str,
        depth: int,
        policy: Policy,
    ) -> None:
        if depth > self.max_depth:
            raise MaxDepthExceededError(self.max_depth)
        if not boundary:
            raise MultipartError(f"{media_type} body has no boundary")

        for defect in container.defects:
            if isinstance(defect, _MULTIPART_DEFECTS):
                raise MultipartError(
                    f"Cannot split {media_type} body on boundary {boundary!r}: "
                    f"{type(defect).__name__}"
                )

        subparts = container.get_payload()
        if not isinstance(subparts, list):
            raise MultipartError(
                f"Cannot split {media_type} body on boundary {boundary!r}"
            )

        logger.debug(
            "multipart_entered",
            media_type=media_type,
            depth=depth,
            parts_count=len(subparts),
        )

        for subpart in subparts:
            self._parse_part(message, subpart, media_type, depth, policy)

    def _parse_part(
        self,
        message: Message,
        entity: EmailMessage,
        parent_media_type: str,
        depth: int,
        policy: Policy,
    ) -> None:
        headers = _collect_headers(entity)
        content_type = _parse_content_type(get_header_value(headers, "Content-Type"))

        if content_type.is_multipart:
            # inner multipart
            self._parse_multipart(
                message,
                entity,
                content_type.media_type,
                content_type.param("boundary"),
                depth + 1,
                policy,
            )
            return

        content = _payload_bytes(entity, policy)
        encoding = get_header_value(headers, "Content-Transfer-Encoding")
        if normalize_encoding(encoding) == TransferEncoding.QUOTED_PRINTABLE.value:
            # decoded while reading the part, which then no longer declares an encoding
            content = decode_quoted_printable(content)
            del headers["Content-Transfer-Encoding"]
            encoding = ""

        body = decode_body(content, encoding)

        if parent_media_type == "multipart/alternative":
            message.parts.append(
                Part(
                    media_type=content_type.media_type,
                    headers=headers,
                    content=body,
                    encoding=encoding or None,
                )
            )
            logger.debug("part_filed", kind="part", media_type=content_type.media_type)
            return

        # attachment/embedded part: Content-Disposition filename wins over Content-Type name
        disposition = _parse_disposition(get_header_value(headers, "Content-Disposition"))
        filename = disposition.params.get("filename", content_type.param("name")).strip()
        if not filename:
            raise BlankFilenameError(
                f"Invalid blank file name for {content_type.media_type} part"
            )

        if disposition.media_type == "inline":
            message.embedded.append(
                EmbeddedFile(filename=filename, headers=headers, content=body)
            )
            kind = "embedded"
        else:
            message.attachments.append(
                Attachment(filename=filename, headers=headers, content=body)
            )
            kind = "attachment"

        logger.debug(
            "part_filed",
            kind=kind,
            media_type=content_type.media_type,
            filename=filename,
        )


def read_message(
    stream: BinaryIO,
    message: Message,
    settings: Optional[Settings] = None,
) -> int:
    """
    Parse a raw message from a binary stream into ``message``.

    Args:
        stream: Binary file-like object
        message: Message to fill (reset before parsing)
        settings: Defaults and limits to parse with (defaults to environment)

    Returns:
        Number of bytes consumed from the stream
    """
    return MessageReader.from_settings(settings).read_message(stream, message)


def parse_eml_bytes(eml_bytes: bytes, settings: Optional[Settings] = None) -> Message:
    """
    Parse raw .eml bytes into a Message.

    Args:
        eml_bytes: Raw message bytes
        settings: Defaults and limits to parse with (defaults to environment)

    Returns:
        Populated Message

    Raises:
        MimeReadError: If the message cannot be parsed
    """
    message = Message()
    read_message(BytesIO(eml_bytes), message, settings)
    return message


def parse_eml_file(eml_path: Union[str, Path], settings: Optional[Settings] = None) -> Message:
    """
    Parse an .eml file into a Message.

    Args:
        eml_path: Path to .eml file
        settings: Defaults and limits to parse with (defaults to environment)

    Returns:
        Populated Message

    Raises:
        FileNotFoundError: If file doesn't exist
        MimeReadError: If the message cannot be parsed
    """
    message = Message()
    with open(eml_path, "rb") as f:
        read_message(f, message, settings)
    return message
