"""Tests for path filtering."""

import re

import pytest

from sprite_sheet_packer.errors import ConfigurationError
from sprite_sheet_packer.filters import (
    PathFilter,
    is_image,
    matches_rules,
    qualifies,
    to_posix,
)


class TestToPosix:
    """Test separator normalization."""

    def test_converts_backslashes(self) -> None:
        """Test that Windows separators become forward slashes."""
        assert to_posix("a\\b\\c.png") == "a/b/c.png"

    def test_posix_paths_unchanged(self) -> None:
        """Test that POSIX paths pass through unchanged."""
        assert to_posix("a/b/c.png") == "a/b/c.png"

    def test_empty_values(self) -> None:
        """Test that None and empty strings become an empty string."""
        assert to_posix(None) == ""
        assert to_posix("") == ""


class TestIsImage:
    """Test the extension check."""

    def test_accepts_png(self) -> None:
        assert is_image("icons/home.png")

    def test_extension_is_case_sensitive(self) -> None:
        """Test that only the exact lowercase suffix qualifies."""
        assert not is_image("icons/home.PNG")
        assert not is_image("icons/home.png.bak")
        assert not is_image("icons/home.jpg")

    def test_rejects_missing_path(self) -> None:
        assert not is_image(None)


class TestMatchesRules:
    """Test rule evaluation."""

    def test_absent_rules_accept_everything(self) -> None:
        """Test that no rule lets every path through."""
        assert matches_rules("anything/at/all.png", None)

    def test_single_pattern_excludes_matches(self) -> None:
        """Test exclude polarity of a single pattern."""
        rule = re.compile(r"/vendor/")
        assert not matches_rules("lib/vendor/logo.png", rule)
        assert matches_rules("icons/logo.png", rule)

    def test_single_pattern_include_polarity(self) -> None:
        """Test that include polarity keeps only matching paths."""
        rule = re.compile(r"^icons/")
        assert matches_rules("icons/logo.png", rule, polarity="include")
        assert not matches_rules("lib/logo.png", rule, polarity="include")

    def test_list_excludes_any_match(self) -> None:
        """Test that a list rule rejects a path matching any element."""
        rules = [re.compile(r"@2x"), re.compile(r"/raw/")]
        assert not matches_rules("icons/home@2x.png", rules)
        assert not matches_rules("icons/raw/home.png", rules)
        assert matches_rules("icons/home.png", rules)

    def test_list_is_always_exclude_polarity(self) -> None:
        """Test that include polarity does not apply to list rules."""
        rules = [re.compile(r"^icons/")]
        assert not matches_rules("icons/home.png", rules, polarity="include")
        assert matches_rules("other/home.png", rules, polarity="include")

    def test_list_reports_offending_index_and_type(self) -> None:
        """Test that a non-pattern element names its index and type."""
        rules = [re.compile(r"nomatch"), "raw", re.compile(r"other")]

        with pytest.raises(ConfigurationError, match="Item at 1") as excinfo:
            matches_rules("icons/home.png", rules)

        assert excinfo.value.index == 1
        assert excinfo.value.actual_type == "str"
        assert excinfo.value.option == "excludes"

    def test_list_checked_even_after_a_match(self) -> None:
        """Test that a bad element fails evaluation even when an earlier pattern matches."""
        rules = [re.compile(r"home"), 42]

        with pytest.raises(ConfigurationError) as excinfo:
            matches_rules("icons/home.png", rules)

        assert excinfo.value.index == 1
        assert excinfo.value.actual_type == "int"

    def test_path_filter_rejects_bad_list_for_matching_path(self) -> None:
        path_filter = PathFilter(excludes=[re.compile(r"home"), 42])

        with pytest.raises(ConfigurationError):
            path_filter.qualifies("icons/home.png")

    def test_include_polarity_names_includes(self) -> None:
        """Test that qualifies() reports the option matching the polarity."""
        with pytest.raises(ConfigurationError) as excinfo:
            qualifies("icons/home.png", "icons", polarity="include")

        assert excinfo.value.option == "includes"
        assert '"includes"' in str(excinfo.value)

    def test_wrong_shape_raises(self) -> None:
        """Test that a rule that is neither pattern nor list is rejected."""
        with pytest.raises(ConfigurationError, match='received "str"') as excinfo:
            matches_rules("icons/home.png", "icons")

        assert excinfo.value.index is None
        assert excinfo.value.actual_type == "str"

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            matches_rules("icons/home.png", {"pattern": "x"})

    def test_separators_do_not_change_result(self) -> None:
        """Test that both separator styles give the same answer."""
        rules = [re.compile(r"a/b/")]
        assert qualifies("a/b/c.png", rules) == qualifies("a\\b\\c.png", rules)
        assert qualifies("a/b/c.png", rules) is False

    def test_evaluation_is_pure(self) -> None:
        """Test that repeated evaluation gives identical results."""
        rule = re.compile(r"sprite")
        results = {matches_rules("img/sprite.png", rule) for _ in range(5)}
        assert results == {False}


class TestPathFilter:
    """Test the PathFilter wrapper."""

    def test_without_rules_every_image_qualifies(self) -> None:
        """Test that absent includes accept every image path."""
        path_filter = PathFilter()
        assert path_filter.qualifies("icons/a.png")
        assert path_filter.qualifies("deep/nested/dir/b.png")
        assert not path_filter.qualifies("main.js")

    def test_includes_use_include_polarity(self) -> None:
        path_filter = PathFilter(includes=re.compile(r"^icons/"))
        assert path_filter.qualifies("icons/a.png")
        assert not path_filter.qualifies("images/a.png")

    def test_excludes_use_exclude_polarity(self) -> None:
        path_filter = PathFilter(excludes=re.compile(r"^icons/"))
        assert not path_filter.qualifies("icons/a.png")
        assert path_filter.qualifies("images/a.png")

    def test_rejects_both_surfaces(self) -> None:
        """Test that includes and excludes cannot be mixed."""
        with pytest.raises(ConfigurationError, match="cannot be combined"):
            PathFilter(includes=re.compile("a"), excludes=re.compile("b"))

    def test_shape_checked_at_evaluation(self) -> None:
        """Test that a malformed rule is accepted until it is evaluated."""
        path_filter = PathFilter(includes=123)  # type: ignore[arg-type]

        with pytest.raises(ConfigurationError, match='"includes"') as excinfo:
            path_filter.qualifies("icons/a.png")

        assert excinfo.value.actual_type == "int"

    def test_select_preserves_order(self) -> None:
        """Test that select keeps discovery order."""
        path_filter = PathFilter(excludes=re.compile(r"skip"))
        paths = ["z.png", "skip.png", "a.png", "main.css", "m.png"]
        assert path_filter.select(paths) == ["z.png", "a.png", "m.png"]
