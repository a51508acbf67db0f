"""
Data models shared by the citation engine and its collaborators.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class CitationMarker:
    """A single <ref> marker found in wikitext."""

    complete: str
    start_tag: str
    end_tag: str
    content: str
    is_self_closing: bool
    attributes: Dict[str, str] = field(default_factory=dict)
    span: Tuple[int, int] = (0, 0)
    index: int = 0


@dataclass
class Metadata:
    """Page metadata returned by a link handler."""

    url: str
    title: str = ""
    author: Optional[str] = None
    published_date: Optional[date] = None
    work: Optional[str] = None
    status_code: Optional[int] = None


class SkipReason(IntEnum):
    """Reasons a citation was left untouched."""

    UNKNOWN = 0
    NOTITLE = 1
    HANDLER = 2
    SPAM = 3


SKIPPED_REASON_TEXT = {
    SkipReason.UNKNOWN: "Unknown error",
    SkipReason.NOTITLE: "No title is found",
    SkipReason.HANDLER: "Processing error",
    SkipReason.SPAM: "Spam blacklist",
}


def get_skipped_reason(reason: int) -> str:
    """Human-readable text for a skip reason code."""
    try:
        return SKIPPED_REASON_TEXT[SkipReason(reason)]
    except ValueError:
        return SKIPPED_REASON_TEXT[SkipReason.UNKNOWN]


class DateFormat(str, Enum):
    """Date styles used when rendering citation dates."""

    ISO = "iso"
    DMY = "dmy"
    MDY = "mdy"


class FixedEntry(BaseModel):
    url: str


class SkippedEntry(BaseModel):
    ref: str
    reason: SkipReason = SkipReason.UNKNOWN
    status: Optional[int] = None
    description: Optional[str] = None


class FixLog(BaseModel):
    """Append-only record of one fix pass."""

    fixed: List[FixedEntry] = Field(default_factory=list)
    skipped: List[SkippedEntry] = Field(default_factory=list)

    def add_fixed(self, url: str) -> None:
        self.fixed.append(FixedEntry(url=url))

    def add_skipped(
        self,
        ref: str,
        reason: SkipReason,
        status: Optional[int] = None,
        description: Optional[str] = None,
    ) -> None:
        self.skipped.append(
            SkippedEntry(ref=ref, reason=reason, status=status, description=description)
        )


class FixOutcome(BaseModel):
    text: str
    log: FixLog


class ResultStatus(IntEnum):
    SUCCESS = 0
    FAILED = 1


class FailureCode(IntEnum):
    NOSOURCE = 1
    PAGENOTFOUND = 2


class SourceKind(IntEnum):
    TEXT = 0
    WIKI = 1


class ReflinksResult(BaseModel):
    """Outcome of a complete request: source acquisition plus fix pass."""

    status: ResultStatus = ResultStatus.FAILED
    failure: Optional[FailureCode] = None
    source: Optional[SourceKind] = None
    old: Optional[str] = None
    new: Optional[str] = None
    log: Optional[FixLog] = None
    summary: Optional[str] = None
    timestamp: Optional[str] = None
    api: Optional[str] = None
    indexphp: Optional[str] = None
    actual_name: Optional[str] = None
    edit_timestamp: Optional[str] = None
