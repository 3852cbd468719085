"""
Message model - structured representation of a decoded MIME message.

This module defines the data structures the reader fills: the message itself,
its textual body parts and the files it carries (attached or embedded).
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..headers import Headers, get_header, get_header_value


class TransferEncoding(str, Enum):
    """Content-Transfer-Encoding labels understood by the reader."""

    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"
    UNENCODED = "8bit"


class ParsedMediaType(BaseModel):
    """A media type value split into its type and parameters."""

    media_type: str = Field(description="Lower-cased media type, e.g. text/plain")
    params: Dict[str, str] = Field(
        default_factory=dict, description="Parameters keyed by lower-cased name"
    )

    model_config = {"frozen": True}

    @property
    def is_multipart(self) -> bool:
        return self.media_type.startswith("multipart/")

    def param(self, name: str, default: str = "") -> str:
        return self.params.get(name, default)


class Part(BaseModel):
    """A decoded textual body of the message."""

    media_type: str = Field(description="MIME type of the body, e.g. text/html")
    headers: Headers = Field(
        default_factory=dict, description="Header subset associated with the body"
    )
    content: bytes = Field(default=b"", description="Body bytes")
    encoding: Optional[str] = Field(
        None, description="Transfer encoding, only when declared by the source"
    )

    model_config = {"frozen": True}


class File(BaseModel):
    """A file carried by the message."""

    filename: str = Field(description="Trimmed, non-blank file name")
    headers: Headers = Field(
        default_factory=dict, description="Full header set of the originating part"
    )
    content: bytes = Field(default=b"", description="Decoded file bytes")

    model_config = {"frozen": True}

    @field_validator("filename")
    @classmethod
    def _filename_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("filename cannot be blank")
        return value

    @property
    def size(self) -> int:
        return len(self.content)


class Attachment(File):
    """A file attached to the message (Content-Disposition other than inline)."""


class EmbeddedFile(File):
    """A file embedded in the message (Content-Disposition: inline)."""


class Message(BaseModel):
    """
    Decoded MIME message.

    Content-Type and Mime-Version never appear in ``headers``: they are consumed
    into ``charset`` and the part structure while reading.
    """

    headers: Headers = Field(default_factory=dict, description="Envelope headers")
    charset: str = Field(default="UTF-8", description="Charset from Content-Type")
    encoding: str = Field(
        default=TransferEncoding.QUOTED_PRINTABLE.value,
        description="Default transfer encoding",
    )
    parts: List[Part] = Field(default_factory=list, description="Textual bodies")
    attachments: List[Attachment] = Field(
        default_factory=list, description="Attached files in stream order"
    )
    embedded: List[EmbeddedFile] = Field(
        default_factory=list, description="Inline files in stream order"
    )

    def reset(
        self,
        charset: str = "UTF-8",
        encoding: str = TransferEncoding.QUOTED_PRINTABLE.value,
    ) -> None:
        """Clear the message back to an empty state with the given defaults."""
        self.headers = {}
        self.charset = charset
        self.encoding = encoding
        self.parts = []
        self.attachments = []
        self.embedded = []

    def get_header(self, name: str) -> List[str]:
        return get_header(self.headers, name)

    def get_header_value(self, name: str) -> str:
        return get_header_value(self.headers, name)
