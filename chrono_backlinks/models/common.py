"""Core shared models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ElementNode(BaseModel):
    """Structural view of one rendered element of a backlink entry."""

    classes: list[str] = Field(default_factory=list)
    text: str = ""
    children: list["ElementNode"] = Field(default_factory=list)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def text_content(self) -> str:
        return self.text + "".join(child.text_content() for child in self.children)


class MetadataRecord(BaseModel):
    path: str
    frontmatter: Optional[dict[str, str]] = None
    mtime: int  # ms since epoch


class BacklinkEntry(BaseModel):
    id: str
    label: Optional[str] = None
    element: Optional[ElementNode] = None


class TimestampSource(str, Enum):
    LONG_FORM = "long_form"
    EMBEDDED_LONG_FORM = "embedded_long_form"
    ISO = "iso"
    FRONTMATTER_EDITED = "frontmatter_edited"
    FRONTMATTER_CREATED = "frontmatter_created"
    MODIFIED = "modified"
    DAILY_NOTE_MODIFIED = "daily_note_modified"
    UNKNOWN = "unknown"


class Resolution(BaseModel):
    label: str
    timestamp: int = 0
    source: TimestampSource = TimestampSource.UNKNOWN


class ResolvedEntry(BaseModel):
    id: str
    label: str
    timestamp: int = 0
    source: TimestampSource = TimestampSource.UNKNOWN
