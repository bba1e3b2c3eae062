"""Tests for the DiffGenerator service."""

import pytest

from models.diff import DiffLineType, DiffOptions
from services.diff_generator import DiffGenerator, DiffSizeLimitError


class TestDefaults:
    def test_from_config(self):
        generator = DiffGenerator.from_config(
            {"diff": {"ignoreCase": True, "contextLines": 1, "maxCells": 10}}
        )
        assert generator.options == DiffOptions(ignore_case=True)
        assert generator.context_lines == 1
        assert generator.max_cells == 10

    def test_from_empty_config(self):
        generator = DiffGenerator.from_config({})
        assert generator.options == DiffOptions()
        assert generator.context_lines == 3

    def test_default_options_apply_when_none_given(self):
        generator = DiffGenerator(options=DiffOptions(ignore_case=True))
        assert generator.diff("ABC", "abc").stats.unchanged_lines == 1
        assert generator.identical("ABC", "abc")

    def test_explicit_options_merge_over_defaults(self):
        generator = DiffGenerator(options=DiffOptions(ignore_whitespace=True))
        stats = generator.diff("a  b", "A b", DiffOptions.model_validate({"ignore_case": True})).stats
        assert stats.unchanged_lines == 1

    def test_explicitly_set_fields_override_defaults(self):
        generator = DiffGenerator(options=DiffOptions(ignore_case=True))
        stats = generator.diff("ABC", "abc", DiffOptions(ignore_case=False)).stats
        assert stats.added_lines == 1
        assert stats.removed_lines == 1

    def test_negative_context_from_config_is_clamped(self):
        generator = DiffGenerator.from_config({"diff": {"contextLines": -1}})
        assert generator.context_lines == 0
        result = generator.enhanced("a\nb\nc", "a\nB\nc")
        assert len(result.hunks) == 1
        assert len(result.hunks[0].lines) == 1

    def test_default_context_lines(self):
        left = "\n".join(f"l{i}" for i in range(10))
        right = left.replace("l0", "L0")
        generator = DiffGenerator(context_lines=0)
        result = generator.enhanced(left, right)
        assert len(result.hunks[0].lines) == 1
        assert len(generator.enhanced(left, right, context_lines=2).hunks[0].lines) == 3


class TestSizeGuard:
    def test_line_diff_over_limit(self):
        generator = DiffGenerator(max_cells=4)
        with pytest.raises(DiffSizeLimitError) as exc_info:
            generator.diff("a\nb\nc", "a\nb")
        assert exc_info.value.cells == 6
        assert exc_info.value.max_cells == 4

    def test_limit_is_inclusive(self):
        assert DiffGenerator(max_cells=6).diff("a\nb\nc", "a\nb").stats.unchanged_lines == 2

    def test_zero_disables_guard(self):
        generator = DiffGenerator(max_cells=0)
        assert generator.unified("a\nb\nc", "a\nb")[-1].prefix == "-"

    def test_inline_counts_characters(self):
        with pytest.raises(DiffSizeLimitError):
            DiffGenerator(max_cells=8).inline("abc", "abcd")

    def test_enhanced_checks_longest_lines(self):
        # Two lines each, but a 10 x 10 character table for the paired line
        generator = DiffGenerator(max_cells=50)
        with pytest.raises(DiffSizeLimitError):
            generator.enhanced("x\n" + "a" * 10, "x\n" + "b" * 10)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError, match="exceeds limit of 1"):
            DiffGenerator(max_cells=1).unified("a\nb", "a")

    def test_identical_is_not_guarded(self):
        assert DiffGenerator(max_cells=1).identical("a\nb\nc", "a\nb\nc")


def test_patch():
    generator = DiffGenerator()
    patch = generator.patch("one\ntwo", "one\n2", from_label="a/x", to_label="b/x")
    assert patch.splitlines() == ["--- a/x", "+++ b/x", "@@ -1,2 +1,2 @@", " one", "-two", "+2"]


def test_enhanced_result_shape():
    result = DiffGenerator().enhanced("keep\nold", "keep\nnew")
    assert [line.type for line in result.hunks[0].lines] == [DiffLineType.EQUAL, DiffLineType.MODIFIED]
