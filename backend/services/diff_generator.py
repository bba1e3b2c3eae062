"""
Diff Generator Service - Apply configured defaults and limits to the diff engine
"""

from __future__ import annotations

import logging
from typing import Any

from models.diff import (
    DiffOptions,
    DiffResult,
    DiffSegment,
    EnhancedDiffResult,
    UnifiedDiffLine,
)

from .enhanced_diff import DEFAULT_CONTEXT_LINES, compute_enhanced_diff, render_patch
from .text_diff import (
    are_texts_identical,
    compute_diff,
    compute_inline_diff,
    get_unified_diff,
    split_lines,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_CELLS = 25_000_000


class DiffSizeLimitError(ValueError):
    """Raised when the LCS table for a request would exceed the configured size"""

    def __init__(self, cells: int, max_cells: int):
        super().__init__(f"Diff too large: {cells} table cells exceeds limit of {max_cells}")
        self.cells = cells
        self.max_cells = max_cells


class DiffGenerator:
    """Run the diff engine with default options and a table-size guard"""

    def __init__(
        self,
        options: DiffOptions | None = None,
        context_lines: int = DEFAULT_CONTEXT_LINES,
        max_cells: int = DEFAULT_MAX_CELLS,
    ):
        self.options = options or DiffOptions()
        self.context_lines = context_lines
        self.max_cells = max_cells

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "DiffGenerator":
        """Build a generator from the "diff" section of the configuration"""
        cfg = config.get("diff", {})
        return cls(
            options=DiffOptions(
                ignore_whitespace=cfg.get("ignoreWhitespace", False),
                ignore_case=cfg.get("ignoreCase", False),
                trim_lines=cfg.get("trimLines", False),
            ),
            context_lines=max(0, cfg.get("contextLines", DEFAULT_CONTEXT_LINES)),
            max_cells=cfg.get("maxCells", DEFAULT_MAX_CELLS),
        )

    # ========== Helpers ==========

    def _resolve(self, options: DiffOptions | None) -> DiffOptions:
        """Overlay the fields a caller actually set on the defaults"""
        if options is None:
            return self.options
        return self.options.model_copy(update=options.model_dump(exclude_unset=True))

    def _check_size(self, left_units: int, right_units: int, kind: str):
        cells = left_units * right_units
        logger.debug("%s diff: %d x %d units", kind, left_units, right_units)
        if self.max_cells and cells > self.max_cells:
            logger.warning("Rejected %s diff of %d cells (limit %d)", kind, cells, self.max_cells)
            raise DiffSizeLimitError(cells, self.max_cells)

    def _check_lines(self, left_text: str, right_text: str):
        self._check_size(len(split_lines(left_text)), len(split_lines(right_text)), "line")

    def _check_enhanced(self, left_text: str, right_text: str):
        self._check_lines(left_text, right_text)
        # Paired lines are diffed character by character as well
        longest_left = max(len(line) for line in split_lines(left_text))
        longest_right = max(len(line) for line in split_lines(right_text))
        self._check_size(longest_left, longest_right, "character")

    # ========== Operations ==========

    def diff(self, left_text: str, right_text: str, options: DiffOptions | None = None) -> DiffResult:
        self._check_lines(left_text, right_text)
        return compute_diff(left_text, right_text, self._resolve(options))

    def inline(self, left_line: str, right_line: str, options: DiffOptions | None = None) -> list[DiffSegment]:
        self._check_size(len(left_line), len(right_line), "character")
        return compute_inline_diff(left_line, right_line, self._resolve(options))

    def enhanced(
        self,
        left_text: str,
        right_text: str,
        options: DiffOptions | None = None,
        context_lines: int | None = None,
    ) -> EnhancedDiffResult:
        self._check_enhanced(left_text, right_text)
        context = self.context_lines if context_lines is None else context_lines
        return compute_enhanced_diff(left_text, right_text, self._resolve(options), context)

    def unified(self, left_text: str, right_text: str, options: DiffOptions | None = None) -> list[UnifiedDiffLine]:
        self._check_lines(left_text, right_text)
        return get_unified_diff(left_text, right_text, self._resolve(options))

    def identical(self, left_text: str, right_text: str, options: DiffOptions | None = None) -> bool:
        # Plain string comparison; no table is built
        return are_texts_identical(left_text, right_text, self._resolve(options))

    def patch(
        self,
        left_text: str,
        right_text: str,
        options: DiffOptions | None = None,
        context_lines: int | None = None,
        from_label: str = "a",
        to_label: str = "b",
    ) -> str:
        """Generate git-style patch text"""
        result = self.enhanced(left_text, right_text, options, context_lines)
        return render_patch(result, from_label, to_label)
