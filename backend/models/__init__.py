"""Models module - Pydantic data models"""

from .diff import (
    DiffHunk,
    DiffLine,
    DiffLineType,
    DiffOptions,
    DiffRequest,
    DiffResult,
    DiffSegment,
    DiffStats,
    DiffType,
    EnhancedDiffLine,
    EnhancedDiffRequest,
    EnhancedDiffResponse,
    EnhancedDiffResult,
    EnhancedDiffStats,
    IdenticalResponse,
    InlineDiffResponse,
    PatchRequest,
    PatchResponse,
    UnifiedDiffLine,
    UnifiedDiffResponse,
)

__all__ = [
    # Diff models
    "DiffType",
    "DiffLineType",
    "DiffOptions",
    "DiffSegment",
    "DiffLine",
    "DiffStats",
    "DiffResult",
    "UnifiedDiffLine",
    "EnhancedDiffLine",
    "DiffHunk",
    "EnhancedDiffStats",
    "EnhancedDiffResult",
    # API models
    "DiffRequest",
    "EnhancedDiffRequest",
    "PatchRequest",
    "InlineDiffResponse",
    "EnhancedDiffResponse",
    "UnifiedDiffResponse",
    "IdenticalResponse",
    "PatchResponse",
]
