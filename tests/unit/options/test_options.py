#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/options/test_options.py
"""Unit tests for options classes and mapping conversion."""

from dataclasses import FrozenInstanceError

import pytest

from texctx.exceptions import ValidationError
from texctx.options import (
    ContextOptions,
    InspectionOptions,
    LatexOptions,
    MathToggleOptions,
    options_from_mapping,
)


@pytest.mark.unit
class TestOptionsValidation:
    """Tests for option value validation."""

    def test_defaults(self) -> None:
        """Test the default values."""
        assert ContextOptions().max_hops == 1000
        assert MathToggleOptions().indent_unit == "    "
        assert MathToggleOptions().one_line_strip_alignment is True
        assert LatexOptions().strict_mode is False
        assert InspectionOptions().missing_label_minimum_level == "subsection"

    def test_max_hops_must_be_positive(self) -> None:
        """Test rejecting a zero hop bound."""
        with pytest.raises(ValueError):
            ContextOptions(max_hops=0)

    def test_indent_unit_whitespace_only(self) -> None:
        """Test rejecting visible characters in the indentation unit."""
        with pytest.raises(ValueError):
            MathToggleOptions(indent_unit="--")
        assert MathToggleOptions(indent_unit="\t").indent_unit == "\t"

    def test_sectioning_level(self) -> None:
        """Test rejecting unknown sectioning levels."""
        with pytest.raises(ValueError):
            InspectionOptions(missing_label_minimum_level="heading")

    def test_sequences_become_tuples(self) -> None:
        """Test that list values are stored as tuples."""
        options = ContextOptions(extra_math_environments=["dmath"])

        assert options.extra_math_environments == ("dmath",)
        hash(options)

    def test_frozen_and_create_updated(self) -> None:
        """Test that options are immutable and can be copied with changes."""
        options = LatexOptions()

        with pytest.raises(FrozenInstanceError):
            options.strict_mode = True  # type: ignore[misc]

        updated = options.create_updated(strict_mode=True)
        assert updated.strict_mode is True
        assert options.strict_mode is False


@pytest.mark.unit
class TestOptionsFromMapping:
    """Tests for options_from_mapping."""

    def test_hyphenated_keys(self) -> None:
        """Test that hyphens and underscores are both accepted."""
        options = options_from_mapping(ContextOptions, {"max-hops": 50, "extra_math_environments": ["dmath"]})

        assert options.max_hops == 50
        assert options.extra_math_environments == ("dmath",)

    def test_empty_mapping(self) -> None:
        """Test that a missing section yields the defaults."""
        assert options_from_mapping(MathToggleOptions, None) == MathToggleOptions()
        assert options_from_mapping(MathToggleOptions, {}) == MathToggleOptions()

    def test_unknown_keys_ignored(self, caplog) -> None:
        """Test that unknown keys are logged and skipped."""
        options = options_from_mapping(LatexOptions, {"strict-mode": True, "colour": "red"})

        assert options.strict_mode is True
        assert "colour" in caplog.text

    def test_invalid_value(self) -> None:
        """Test that rejected values surface as ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            options_from_mapping(ContextOptions, {"max_hops": -1})

        assert isinstance(exc_info.value.original_error, ValueError)
