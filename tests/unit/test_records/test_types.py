"""Unit tests for entity type classification."""

import pytest

from src.records.types import NON_LANGUAGE_TYPES, is_language


class TestIsLanguage:
    """Tests for is_language."""

    @pytest.mark.parametrize("entity_type", ["pl", "esolang", "textMarkup", "isa"])
    def test_language_types(self, entity_type: str) -> None:
        """Types not on the exclusion list are languages."""
        assert is_language(entity_type)

    @pytest.mark.parametrize("entity_type", sorted(NON_LANGUAGE_TYPES))
    def test_non_language_types(self, entity_type: str) -> None:
        """Every excluded type is not a language."""
        assert not is_language(entity_type)

    def test_missing_type(self) -> None:
        """Records without a type count as languages."""
        assert is_language(None)
