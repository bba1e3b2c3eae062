"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .diff_generator import DiffGenerator, DiffSizeLimitError
from .enhanced_diff import (
    compute_enhanced_diff,
    format_hunk_header,
    group_into_hunks,
    render_patch,
)
from .text_diff import (
    are_texts_identical,
    compute_diff,
    compute_inline_diff,
    get_unified_diff,
)

__all__ = [
    "ConfigManager",
    "DiffGenerator",
    "DiffSizeLimitError",
    # Diff engine
    "compute_diff",
    "compute_inline_diff",
    "compute_enhanced_diff",
    "get_unified_diff",
    "are_texts_identical",
    "format_hunk_header",
    "group_into_hunks",
    "render_patch",
]
