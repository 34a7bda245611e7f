"""
Unit tests for the quote catalog
"""

import pytest

from store import Quote, QuoteCatalog
from utils.exceptions import ConfigurationError


@pytest.mark.unit
class TestQuoteCatalog:
    """Test cases for QuoteCatalog"""

    def test_from_config(self, catalog):
        assert len(catalog) == 2
        quote = catalog.get("2025-09-08")
        assert quote.author == "앨런 케이"
        assert quote.answer_a == "미래"
        assert "2025-09-09" in catalog

    def test_unknown_quote(self, catalog):
        assert catalog.get("does-not-exist") is None
        assert "does-not-exist" not in catalog

    def test_from_config_maps_wire_names(self, catalog):
        quote = catalog.get("2025-09-09")
        assert quote.answer_a == "실패"
        assert quote.answer_b == "성공"
        assert quote.author == "토머스 에디슨"

    def test_duplicate_ids_rejected(self):
        quote = Quote("x", "(A) (B)", "anon", "a", "b")
        with pytest.raises(ConfigurationError):
            QuoteCatalog([quote, quote])

    def test_invalid_definition_rejected(self):
        with pytest.raises(ConfigurationError):
            QuoteCatalog.from_config([{"id": "x", "template": "(A) (B)"}])

    def test_quotes_are_immutable(self, catalog):
        quote = catalog.get("2025-09-08")
        with pytest.raises(AttributeError):
            quote.author = "someone else"
