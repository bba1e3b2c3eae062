"""
Text Diff - Line and character level diffs using the LCS algorithm
"""

from __future__ import annotations

import re
from typing import NamedTuple, Sequence

from models.diff import (
    DiffLine,
    DiffOptions,
    DiffResult,
    DiffSegment,
    DiffStats,
    DiffType,
    UnifiedDiffLine,
)

DEFAULT_OPTIONS = DiffOptions()

_WHITESPACE_RUN = re.compile(r"\s+")


class DiffItem(NamedTuple):
    """One backtracked step; indices point into the compared sequences"""

    type: DiffType
    left_index: int | None
    right_index: int | None


# ========== Normalizer ==========


def normalize_for_comparison(text: str, options: DiffOptions) -> str:
    """Project a line onto the value used for equality tests"""
    result = text

    if options.trim_lines:
        result = result.strip()

    if options.ignore_whitespace:
        result = _WHITESPACE_RUN.sub(" ", result).strip()

    if options.ignore_case:
        result = result.lower()

    return result


def normalize_char(char: str, ignore_case: bool) -> str:
    return char.lower() if ignore_case else char


def split_lines(text: str) -> list[str]:
    """Split on newlines; an empty text is one empty line"""
    return text.split("\n")


# ========== LCS table + backtracking ==========


def build_lcs_table(left: Sequence[str], right: Sequence[str]) -> list[int]:
    """
    Build the LCS length table for two sequences of normalized keys.

    The (m+1) x (n+1) table is stored row-major in one flat list,
    cell (i, j) living at i * (n + 1) + j. Row 0 and column 0 stay zero.
    """
    m = len(left)
    n = len(right)
    width = n + 1
    table = [0] * ((m + 1) * width)

    for i in range(1, m + 1):
        left_key = left[i - 1]
        row = i * width
        prev_row = row - width
        for j in range(1, n + 1):
            if left_key == right[j - 1]:
                table[row + j] = table[prev_row + j - 1] + 1
            else:
                up = table[prev_row + j]
                left_cell = table[row + j - 1]
                table[row + j] = up if up >= left_cell else left_cell

    return table


def _cell(table: Sequence[int], width: int, i: int, j: int) -> int:
    if i < 0 or j < 0 or j >= width:
        return 0
    index = i * width + j
    return table[index] if index < len(table) else 0


def backtrack(left: Sequence[str], right: Sequence[str], table: Sequence[int]) -> list[DiffItem]:
    """
    Walk the LCS table from (m, n) back to (0, 0).

    When the cell above is at least as large as the cell to the left, the
    walk emits a delete, so ties always resolve to delete before insert.
    Within every run of non-equal items the deletes are listed before the
    inserts; the relative order of each kind is kept.
    """
    width = len(right) + 1
    items: list[DiffItem] = []
    i = len(left)
    j = len(right)

    while i > 0 or j > 0:
        if i > 0 and j > 0 and left[i - 1] == right[j - 1]:
            items.append(DiffItem(DiffType.EQUAL, i - 1, j - 1))
            i -= 1
            j -= 1
        elif i > 0 and (j == 0 or _cell(table, width, i - 1, j) >= _cell(table, width, i, j - 1)):
            items.append(DiffItem(DiffType.DELETE, i - 1, None))
            i -= 1
        else:
            items.append(DiffItem(DiffType.INSERT, None, j - 1))
            j -= 1

    items.reverse()
    return _deletes_first(items)


def _deletes_first(items: list[DiffItem]) -> list[DiffItem]:
    # The reverse walk alone leaves inserts ahead of deletes in a run;
    # git lists removals first, so each run is reordered here.
    ordered: list[DiffItem] = []
    deletes: list[DiffItem] = []
    inserts: list[DiffItem] = []

    for item in items:
        if item.type == DiffType.EQUAL:
            ordered.extend(deletes)
            ordered.extend(inserts)
            deletes = []
            inserts = []
            ordered.append(item)
        elif item.type == DiffType.DELETE:
            deletes.append(item)
        else:
            inserts.append(item)

    ordered.extend(deletes)
    ordered.extend(inserts)
    return ordered


# ========== Character diff ==========


def merge_segments(segments: Sequence[DiffSegment]) -> list[DiffSegment]:
    """Merge consecutive segments that share a type"""
    merged: list[DiffSegment] = []
    for segment in segments:
        if merged and merged[-1].type == segment.type:
            merged[-1] = DiffSegment(type=segment.type, value=merged[-1].value + segment.value)
        else:
            merged.append(segment)
    return merged


def compute_char_diff(left: str, right: str, options: DiffOptions) -> list[DiffSegment]:
    if not left:
        return [DiffSegment(type=DiffType.INSERT, value=right)] if right else []
    if not right:
        return [DiffSegment(type=DiffType.DELETE, value=left)]

    left_keys = [normalize_char(c, options.ignore_case) for c in left]
    right_keys = [normalize_char(c, options.ignore_case) for c in right]
    table = build_lcs_table(left_keys, right_keys)

    segments = []
    for item in backtrack(left_keys, right_keys, table):
        # Equal characters carry the right-hand spelling
        char = left[item.left_index] if item.type == DiffType.DELETE else right[item.right_index]
        segments.append(DiffSegment(type=item.type, value=char))

    return merge_segments(segments)


def compute_inline_diff(
    left_line: str,
    right_line: str,
    options: DiffOptions | None = None,
) -> list[DiffSegment]:
    """Compute a character-level diff of two single lines"""
    return compute_char_diff(left_line, right_line, options or DEFAULT_OPTIONS)


# ========== Line diff ==========


def _placeholder() -> DiffLine:
    return DiffLine(line_number=None, content="", type=DiffType.EQUAL)


def build_diff_result(items: Sequence[DiffItem], left: Sequence[str], right: Sequence[str]) -> DiffResult:
    """Turn backtracked items into index-aligned left/right line arrays"""
    left_lines: list[DiffLine] = []
    right_lines: list[DiffLine] = []

    left_line_num = 1
    right_line_num = 1
    added_lines = removed_lines = unchanged_lines = 0
    added_chars = removed_chars = 0

    for item in items:
        if item.type == DiffType.EQUAL:
            left_lines.append(DiffLine(line_number=left_line_num, content=left[item.left_index], type=DiffType.EQUAL))
            right_lines.append(
                DiffLine(line_number=right_line_num, content=right[item.right_index], type=DiffType.EQUAL)
            )
            left_line_num += 1
            right_line_num += 1
            unchanged_lines += 1
        elif item.type == DiffType.DELETE:
            content = left[item.left_index]
            left_lines.append(DiffLine(line_number=left_line_num, content=content, type=DiffType.DELETE))
            right_lines.append(_placeholder())
            left_line_num += 1
            removed_lines += 1
            removed_chars += len(content)
        else:
            content = right[item.right_index]
            left_lines.append(_placeholder())
            right_lines.append(DiffLine(line_number=right_line_num, content=content, type=DiffType.INSERT))
            right_line_num += 1
            added_lines += 1
            added_chars += len(content)

    return DiffResult(
        left_lines=left_lines,
        right_lines=right_lines,
        stats=DiffStats(
            total_lines=max(len(left), len(right)),
            added_lines=added_lines,
            removed_lines=removed_lines,
            unchanged_lines=unchanged_lines,
            added_chars=added_chars,
            removed_chars=removed_chars,
        ),
    )


def compute_diff(left_text: str, right_text: str, options: DiffOptions | None = None) -> DiffResult:
    """Compute a line-level diff between two texts"""
    opts = options or DEFAULT_OPTIONS
    left = split_lines(left_text)
    right = split_lines(right_text)

    left_keys = [normalize_for_comparison(line, opts) for line in left]
    right_keys = [normalize_for_comparison(line, opts) for line in right]
    table = build_lcs_table(left_keys, right_keys)
    items = backtrack(left_keys, right_keys, table)

    return build_diff_result(items, left, right)


# ========== Unified view + identity ==========


def get_unified_diff(
    left_text: str,
    right_text: str,
    options: DiffOptions | None = None,
) -> list[UnifiedDiffLine]:
    """Flatten the line diff into +/-/space prefixed lines"""
    result = compute_diff(left_text, right_text, options)
    lines: list[UnifiedDiffLine] = []

    for left_line, right_line in zip(result.left_lines, result.right_lines):
        if left_line.type == DiffType.DELETE:
            lines.append(UnifiedDiffLine(prefix="-", content=left_line.content, type=DiffType.DELETE))
        if right_line.type == DiffType.INSERT:
            lines.append(UnifiedDiffLine(prefix="+", content=right_line.content, type=DiffType.INSERT))
        if left_line.type == DiffType.EQUAL and left_line.line_number is not None:
            lines.append(UnifiedDiffLine(prefix=" ", content=left_line.content, type=DiffType.EQUAL))

    return lines


def are_texts_identical(left_text: str, right_text: str, options: DiffOptions | None = None) -> bool:
    """Compare two whole texts after normalization, without diffing"""
    opts = options or DEFAULT_OPTIONS
    return normalize_for_comparison(left_text, opts) == normalize_for_comparison(right_text, opts)
