"""
Enhanced Diff - Modified-line pairing, hunk grouping and patch rendering
"""

from __future__ import annotations

from typing import Sequence

from models.diff import (
    DiffHunk,
    DiffLineType,
    DiffOptions,
    DiffResult,
    DiffSegment,
    DiffType,
    EnhancedDiffLine,
    EnhancedDiffResult,
    EnhancedDiffStats,
)

from .text_diff import DEFAULT_OPTIONS, compute_char_diff, compute_diff

DEFAULT_CONTEXT_LINES = 3


def _raw_changes(result: DiffResult) -> list[EnhancedDiffLine]:
    """Read the aligned line arrays in lockstep, dropping placeholders"""
    changes: list[EnhancedDiffLine] = []

    for left, right in zip(result.left_lines, result.right_lines):
        if left.type == DiffType.DELETE and left.line_number is not None:
            changes.append(
                EnhancedDiffLine(
                    left_line_number=left.line_number,
                    right_line_number=None,
                    left_content=left.content,
                    right_content="",
                    type=DiffLineType.DELETE,
                )
            )
        elif right.type == DiffType.INSERT and right.line_number is not None:
            changes.append(
                EnhancedDiffLine(
                    left_line_number=None,
                    right_line_number=right.line_number,
                    left_content="",
                    right_content=right.content,
                    type=DiffLineType.INSERT,
                )
            )
        elif left.type == DiffType.EQUAL and left.line_number is not None:
            changes.append(
                EnhancedDiffLine(
                    left_line_number=left.line_number,
                    right_line_number=right.line_number,
                    left_content=left.content,
                    right_content=right.content,
                    type=DiffLineType.EQUAL,
                )
            )

    return changes


def _segment_runs(changes: Sequence[EnhancedDiffLine]) -> list[list[EnhancedDiffLine]]:
    """Every equal line is its own run; consecutive changes share one"""
    runs: list[list[EnhancedDiffLine]] = []
    current: list[EnhancedDiffLine] = []

    for change in changes:
        if change.type == DiffLineType.EQUAL:
            if current:
                runs.append(current)
                current = []
            runs.append([change])
        else:
            current.append(change)

    if current:
        runs.append(current)
    return runs


def split_segments(segments: Sequence[DiffSegment]) -> tuple[list[DiffSegment], list[DiffSegment]]:
    """Split a character diff into left (equal+delete) and right (equal+insert) views"""
    left_segments: list[DiffSegment] = []
    right_segments: list[DiffSegment] = []

    for segment in segments:
        if segment.type == DiffType.EQUAL:
            left_segments.append(segment)
            right_segments.append(segment)
        elif segment.type == DiffType.DELETE:
            left_segments.append(segment)
        else:
            right_segments.append(segment)

    return left_segments, right_segments


def _pair_run(run: Sequence[EnhancedDiffLine], options: DiffOptions) -> list[EnhancedDiffLine]:
    """
    Pair deletes with inserts by position inside one change run.

    The first k = min(deletes, inserts) of each are zipped into modified
    lines; leftovers stay pure deletes or inserts, in that order.
    """
    deletes = [c for c in run if c.type == DiffLineType.DELETE]
    inserts = [c for c in run if c.type == DiffLineType.INSERT]
    pairs = min(len(deletes), len(inserts))

    lines: list[EnhancedDiffLine] = []
    for deleted, inserted in zip(deletes[:pairs], inserts[:pairs]):
        char_segments = compute_char_diff(deleted.left_content, inserted.right_content, options)
        left_segments, right_segments = split_segments(char_segments)
        lines.append(
            EnhancedDiffLine(
                left_line_number=deleted.left_line_number,
                right_line_number=inserted.right_line_number,
                left_content=deleted.left_content,
                right_content=inserted.right_content,
                type=DiffLineType.MODIFIED,
                left_segments=left_segments,
                right_segments=right_segments,
            )
        )

    lines.extend(deletes[pairs:])
    lines.extend(inserts[pairs:])
    return lines


def build_enhanced_lines(result: DiffResult, options: DiffOptions | None = None) -> list[EnhancedDiffLine]:
    """Classify a line diff into equal/modified/delete/insert lines"""
    opts = options or DEFAULT_OPTIONS
    lines: list[EnhancedDiffLine] = []

    for run in _segment_runs(_raw_changes(result)):
        if len(run) == 1 and run[0].type == DiffLineType.EQUAL:
            lines.append(run[0])
        else:
            lines.extend(_pair_run(run, opts))

    return lines


def _make_hunk(lines: list[EnhancedDiffLine], start_left: int, start_right: int) -> DiffHunk:
    return DiffHunk(
        start_left=start_left,
        start_right=start_right,
        count_left=sum(1 for line in lines if line.left_line_number is not None),
        count_right=sum(1 for line in lines if line.right_line_number is not None),
        lines=lines,
    )


def group_into_hunks(
    lines: Sequence[EnhancedDiffLine],
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> list[DiffHunk]:
    """Group lines into hunks, padding each change with context lines"""
    context_lines = max(0, context_lines)
    if not lines:
        return []

    change_indices = [idx for idx, line in enumerate(lines) if line.type != DiffLineType.EQUAL]
    if not change_indices:
        return [_make_hunk(list(lines), 1, 1)]

    last = len(lines) - 1
    ranges: list[list[int]] = []
    for idx in change_indices:
        start = max(0, idx - context_lines)
        end = min(last, idx + context_lines)
        if ranges and start <= ranges[-1][1] + 1:
            ranges[-1][1] = end
        else:
            ranges.append([start, end])

    hunks = []
    for start, end in ranges:
        hunk_lines = list(lines[start : end + 1])
        first = hunk_lines[0]
        hunks.append(
            _make_hunk(
                hunk_lines,
                first.left_line_number if first.left_line_number is not None else 1,
                first.right_line_number if first.right_line_number is not None else 1,
            )
        )
    return hunks


def compute_enhanced_diff(
    left_text: str,
    right_text: str,
    options: DiffOptions | None = None,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> EnhancedDiffResult:
    """Compute a hunk-grouped diff with inline character highlighting"""
    opts = options or DEFAULT_OPTIONS
    result = compute_diff(left_text, right_text, opts)

    lines = build_enhanced_lines(result, opts)
    hunks = group_into_hunks(lines, context_lines)

    return EnhancedDiffResult(
        hunks=hunks,
        stats=EnhancedDiffStats(
            **result.stats.model_dump(),
            hunk_count=len(hunks),
            modified_lines=sum(1 for line in lines if line.type == DiffLineType.MODIFIED),
        ),
    )


# ========== Formatting ==========


def format_hunk_header(hunk: DiffHunk) -> str:
    """Format a hunk header like git diff (e.g. @@ -1,4 +1,5 @@)"""
    return f"@@ -{hunk.start_left},{hunk.count_left} +{hunk.start_right},{hunk.count_right} @@"


def render_patch(result: EnhancedDiffResult, from_label: str = "a", to_label: str = "b") -> str:
    """Render an enhanced diff as git-style patch text"""
    if not any(line.type != DiffLineType.EQUAL for hunk in result.hunks for line in hunk.lines):
        return ""

    out = [f"--- {from_label}", f"+++ {to_label}"]
    for hunk in result.hunks:
        out.append(format_hunk_header(hunk))
        for line in hunk.lines:
            if line.type == DiffLineType.EQUAL:
                out.append(f" {line.left_content}")
            elif line.type == DiffLineType.MODIFIED:
                out.append(f"-{line.left_content}")
                out.append(f"+{line.right_content}")
            elif line.type == DiffLineType.DELETE:
                out.append(f"-{line.left_content}")
            else:
                out.append(f"+{line.right_content}")

    return "\n".join(out) + "\n"
