"""Tests for the ContentHash value object."""

import pytest

from microscroll.domain.common.value_objects import ContentHash


class TestContentHash:
    def test_compute_is_stable(self) -> None:
        assert ContentHash.compute("batch") == ContentHash.compute("batch")
        assert len(ContentHash.compute("batch").value) == 64

    def test_rejects_malformed_digest(self) -> None:
        with pytest.raises(ValueError):
            ContentHash("ABC")

    def test_rejects_empty_content(self) -> None:
        with pytest.raises(ValueError):
            ContentHash.compute("")

    def test_parts_order_matters(self) -> None:
        assert ContentHash.compute_from_parts(1, 2) != ContentHash.compute_from_parts(2, 1)

    def test_separator_inside_a_part_keeps_boundaries(self) -> None:
        """Test that moving a '|' between string parts changes the hash."""
        assert ContentHash.compute_from_parts("a|b", "c") != ContentHash.compute_from_parts(
            "a", "b|c"
        )
        assert ContentHash.compute_from_parts("x|5", 3) != ContentHash.compute_from_parts(
            "x", "5|3"
        )

    def test_none_and_empty_string_differ(self) -> None:
        assert ContentHash.compute_from_parts(None) != ContentHash.compute_from_parts("")
