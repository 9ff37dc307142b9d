"""
Validator, formatter and metrics tests
"""
from decimal import Decimal

import pytest

from core.exceptions import ValidationError
from core.metrics import calculate_domain_metrics, categorize, memorability_score
from utils.formatters import filter_candidates, format_price, sort_candidates
from utils.validators import clean_domain, normalize_domain, sanitize_input, validate_domain


ROWS = [
    {"name": "alpha.io", "extension": ".io", "price": "48.88", "is_available": True, "length": 8,
     "tags": ["alpha"], "description": "Perfect for alpha related businesses"},
    {"name": "beta.com", "extension": ".com", "price": "10.73", "is_available": False, "length": 8,
     "tags": ["beta"], "description": "Perfect for beta related businesses"},
    {"name": "gammahub.com", "extension": ".com", "price": "10.73", "is_available": True, "length": 12,
     "tags": ["gamma"], "description": "Perfect for gamma related businesses"},
    {"name": "delta.dev", "extension": ".dev", "price": None, "is_available": True, "length": 9,
     "tags": ["delta", "startup"], "description": None},
]


class TestDomainValidators:
    """Tests for domain normalization and validation"""

    def test_normalize_strips_url_parts(self):
        """Test scheme, www, path, query and port removal"""
        assert normalize_domain("https://www.Example.com/path?x=1") == "example.com"
        assert normalize_domain("example.com:8080") == "example.com"
        assert normalize_domain("  Example.IO  ") == "example.io"

    def test_normalize_adds_com(self):
        """Test that a bare name gets the primary extension"""
        assert normalize_domain("acme") == "acme.com"

    def test_validate(self):
        """Test syntactic validity"""
        assert validate_domain("my-shop.co")
        assert validate_domain("sub.example.org")
        assert not validate_domain("-bad.com")
        assert not validate_domain("bad-.com")
        assert not validate_domain("no_underscore.com")
        assert not validate_domain("a" * 250 + ".com")
        assert not validate_domain("")

    def test_clean_domain_rejects(self):
        """Test that invalid input raises with the invalid_domain code"""
        with pytest.raises(ValidationError) as exc_info:
            clean_domain("http://")

        assert exc_info.value.error_code == "invalid_domain"
        assert exc_info.value.status_code == 400

    def test_sanitize_input(self):
        """Test control character removal and truncation"""
        assert sanitize_input("  tech\x00 startup\x07 ") == "tech startup"
        assert sanitize_input("abcdef", max_length=3) == "abc"


class TestFormatters:
    """Tests for candidate sorting, filtering and price display"""

    def test_format_price(self):
        """Test price display"""
        assert format_price(Decimal("10.7")) == "$10.70"
        assert format_price("1234.5") == "$1,234.50"
        assert format_price("9.99", currency="EUR") == "EUR 9.99"
        assert format_price(None) == "N/A"

    def test_relevance_keeps_order(self):
        """Test that no sort keeps generation order"""
        assert sort_candidates(ROWS) == ROWS
        assert sort_candidates(ROWS, "relevance") == ROWS

    def test_price_asc_is_stable(self):
        """Test ascending price with ties in input order and unknown prices last"""
        names = [row["name"] for row in sort_candidates(ROWS, "price-asc")]
        assert names == ["beta.com", "gammahub.com", "alpha.io", "delta.dev"]

    def test_price_desc_is_stable(self):
        """Test descending price keeps ties in input order"""
        names = [row["name"] for row in sort_candidates(ROWS[:3], "price-desc")]
        assert names == ["alpha.io", "beta.com", "gammahub.com"]

    def test_length_and_alphabetical(self):
        """Test the remaining sort options"""
        assert [r["name"] for r in sort_candidates(ROWS, "length")][-1] == "gammahub.com"
        assert [r["name"] for r in sort_candidates(ROWS, "alphabetical")] == [
            "alpha.io", "beta.com", "delta.dev", "gammahub.com"
        ]

    @pytest.mark.parametrize("sort_by", ["price-asc", "price-desc", "length", "alphabetical"])
    def test_sorting_twice_changes_nothing(self, sort_by):
        """Test that each sort is idempotent"""
        once = sort_candidates(ROWS, sort_by)
        assert sort_candidates(once, sort_by) == once

    def test_sort_keeps_membership(self):
        """Test that sorting never adds or drops rows"""
        names = sorted(row["name"] for row in ROWS)
        for sort_by in (None, "price-asc", "price-desc", "length", "alphabetical"):
            assert sorted(row["name"] for row in sort_candidates(ROWS, sort_by)) == names

    def test_sort_does_not_mutate(self):
        """Test that the input list is left alone"""
        rows = list(ROWS)
        sort_candidates(rows, "price-desc")
        assert rows == ROWS

    def test_filter_by_price_and_availability(self):
        """Test price bounds and available_only"""
        rows = filter_candidates(ROWS, min_price=Decimal("10"), max_price=Decimal("20"), available_only=True)
        assert [row["name"] for row in rows] == ["gammahub.com"]

    def test_filter_by_extension_and_length(self):
        """Test extension and maximum length filters"""
        rows = filter_candidates(ROWS, extensions=["COM", ".dev"], max_length=9)
        assert [row["name"] for row in rows] == ["beta.com", "delta.dev"]

    def test_filter_by_text(self):
        """Test substring matching on name, tags and description"""
        assert [r["name"] for r in filter_candidates(ROWS, query="hub")] == ["gammahub.com"]
        assert [r["name"] for r in filter_candidates(ROWS, query="Startup")] == ["delta.dev"]
        assert [r["name"] for r in filter_candidates(ROWS, query="beta related")] == ["beta.com"]


class TestDomainMetrics:
    """Tests for domain quality scores"""

    def test_clean_name(self):
        """Test scores for a short dictionary-word name"""
        metrics = calculate_domain_metrics("besttech.com")

        assert metrics.length == 8
        assert metrics.seo_score == 100
        assert metrics.brandability == 95
        assert metrics.memorability == 95
        assert metrics.category == "tech"
        assert metrics.age == "New domain"

    def test_hyphens_and_numbers(self):
        """Test typability flags"""
        metrics = calculate_domain_metrics("my-app2.io")

        assert metrics.has_hyphens is True
        assert metrics.has_numbers is True
        assert metrics.is_typable is False

    def test_alliteration_across_hyphen(self):
        """Test that hyphen-separated words sharing a first letter score higher"""
        assert memorability_score("big-bang") == 85
        assert memorability_score("big-cat") == 70

    def test_lowercase_name_is_one_word(self):
        """Test that a lowercase name is not split into words"""
        assert memorability_score("bigbang") == 70

    def test_scores_are_bounded(self):
        """Test the 0..100 range on a long awkward name"""
        metrics = calculate_domain_metrics("x" * 40 + "-9.com")
        for score in (metrics.seo_score, metrics.brandability, metrics.memorability):
            assert 0 <= score <= 100

    def test_categorize_default(self):
        """Test the fallback category"""
        assert categorize("zqxv") == "general"
        assert categorize("fitcoach") == "health"
