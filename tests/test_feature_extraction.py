"""Unit tests for cfg guard feature-name extraction."""

import pytest

from featcheck.extraction import extract_feature_names


class TestExtractFeatureNames:
    """extract_feature_names is pure and never raises."""

    def test_single_guard(self):
        assert extract_feature_names('#[cfg(feature = "foo")]') == ["foo"]

    def test_hyphenated_and_underscored_names(self):
        line = '#[cfg(any(feature = "serde-json", feature = "no_std"))]'
        assert extract_feature_names(line) == ["serde-json", "no_std"]

    def test_multiple_guards_keep_order(self):
        line = '#[cfg(all(feature = "b", feature="a", not(feature   =   "c")))]'
        assert extract_feature_names(line) == ["b", "a", "c"]

    def test_repeated_guard_is_reported_each_time(self):
        line = '#[cfg(any(feature = "x", feature = "x"))]'
        assert extract_feature_names(line) == ["x", "x"]

    def test_empty_name_is_preserved(self):
        assert extract_feature_names('#[cfg(feature = "")]') == [""]

    def test_cfg_attr_guard(self):
        line = '#[cfg_attr(feature = "serde", derive(Serialize))]'
        assert extract_feature_names(line) == ["serde"]

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "fn main() {}",
            "// features are great",
            '#[cfg(target_os = "linux")]',
            '#[cfg(feature = unquoted)]',
            '#[cfg(feature = "has space")]',
            "\x00\xff� binary-ish \x1b[0m",
        ],
    )
    def test_lines_without_valid_guards_yield_nothing(self, line):
        assert extract_feature_names(line) == []

    def test_long_pathological_line_returns_quickly(self):
        line = 'feature = "' + "a-" * 5000 + "!"
        assert extract_feature_names(line) == []
