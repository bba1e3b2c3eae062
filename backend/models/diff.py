"""Diff-related data models"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class DiffType(str, Enum):
    """Kind of a single diff item or character segment"""

    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"


class DiffLineType(str, Enum):
    """Kind of an enhanced (side-by-side) diff line"""

    EQUAL = "equal"
    MODIFIED = "modified"
    DELETE = "delete"
    INSERT = "insert"


class DiffOptions(BaseModel):
    """Comparison options; they only affect equality testing"""

    ignore_whitespace: bool = False
    ignore_case: bool = False
    trim_lines: bool = False


class DiffSegment(BaseModel):
    """A maximal run of same-type characters"""

    type: DiffType
    value: str


class DiffLine(BaseModel):
    """One entry of an aligned left/right line array"""

    line_number: int | None  # None only for alignment placeholders
    content: str
    type: DiffType
    segments: list[DiffSegment] | None = None


class DiffStats(BaseModel):
    """Aggregate counts for a line diff"""

    total_lines: int
    added_lines: int
    removed_lines: int
    unchanged_lines: int
    added_chars: int
    removed_chars: int


class DiffResult(BaseModel):
    """Line-level diff with index-aligned left and right arrays"""

    left_lines: list[DiffLine]
    right_lines: list[DiffLine]
    stats: DiffStats


class UnifiedDiffLine(BaseModel):
    """A single line of the unified (git-style) view"""

    prefix: Literal["+", "-", " "]
    content: str
    type: DiffType


class EnhancedDiffLine(BaseModel):
    """A side-by-side line; only modified lines carry segments"""

    left_line_number: int | None
    right_line_number: int | None
    left_content: str
    right_content: str
    type: DiffLineType
    left_segments: list[DiffSegment] | None = None
    right_segments: list[DiffSegment] | None = None


class DiffHunk(BaseModel):
    """A context-padded group of changed lines"""

    start_left: int
    start_right: int
    count_left: int
    count_right: int
    lines: list[EnhancedDiffLine] = []


class EnhancedDiffStats(DiffStats):
    """Line diff stats plus hunk and modification counts"""

    hunk_count: int
    modified_lines: int


class EnhancedDiffResult(BaseModel):
    """Hunk-grouped diff with inline highlighting"""

    hunks: list[DiffHunk]
    stats: EnhancedDiffStats


# ========== API request/response models ==========


class DiffRequest(BaseModel):
    """Request for a diff of two texts"""

    left: str
    right: str
    options: DiffOptions | None = None  # Falls back to configured defaults


class EnhancedDiffRequest(DiffRequest):
    """Request for a hunk-grouped diff"""

    context_lines: int | None = Field(default=None, ge=0)


class PatchRequest(EnhancedDiffRequest):
    """Request for git-style patch text"""

    from_label: str = "a"
    to_label: str = "b"


class InlineDiffResponse(BaseModel):
    """Character-level diff response"""

    segments: list[DiffSegment]


class EnhancedDiffResponse(EnhancedDiffResult):
    """Enhanced diff plus one rendered header per hunk"""

    headers: list[str]


class UnifiedDiffResponse(BaseModel):
    """Unified view response"""

    lines: list[UnifiedDiffLine]


class IdenticalResponse(BaseModel):
    """Identity check response"""

    identical: bool


class PatchResponse(BaseModel):
    """Patch text response"""

    patch: str
