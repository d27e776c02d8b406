"""Tests for HTML and JSON selection helpers."""

import pytest

from monitors.exceptions import ExtractionError
from monitors.extraction import (
    extract_json_value,
    find_json_matches,
    format_json_value,
    page_title,
    select_fragment,
)

PAGE = """<html>
<head><title> Shop </title></head>
<body>
  <div class="price">10</div>
  <div class="price">12</div>
  <p id="stock">In stock</p>
</body>
</html>"""


class TestSelectFragment:
    """Test CSS selection on HTML pages."""

    @pytest.mark.parametrize("selector", ["", "*", "body", "  body  "])
    def test_whole_page_selectors(self, selector):
        """Test selectors meaning the whole page."""
        assert select_fragment(PAGE, selector) == PAGE

    def test_single_match(self):
        """Test the inner HTML of a single match."""
        assert select_fragment(PAGE, "#stock") == "In stock"

    def test_multiple_matches_are_joined(self):
        """Test several matches are joined with newlines."""
        assert select_fragment(PAGE, "div.price") == "10\n12"

    def test_no_match_raises(self):
        """Test a selector matching nothing."""
        with pytest.raises(ExtractionError, match="No matching elements"):
            select_fragment(PAGE, ".missing")

    def test_invalid_selector_raises(self):
        """Test a selector that cannot be parsed."""
        with pytest.raises(ExtractionError, match="Failed to parse selector"):
            select_fragment(PAGE, "div[")


def test_page_title():
    """Test the title is stripped, and missing titles give None."""
    assert page_title(PAGE) == "Shop"
    assert page_title("<p>no title</p>") is None


class TestJsonSelection:
    """Test path evaluation on JSON payloads."""

    @pytest.fixture
    def payload(self):
        """Sample API payload."""
        return {
            "data": {
                "price": 42.5,
                "name": "BTC",
                "items": [{"id": 1}, {"id": 2}],
            }
        }

    def test_empty_path_is_whole_payload(self, payload):
        """Test an empty path matches everything."""
        assert find_json_matches(payload, "") == [payload]

    def test_dot_path(self, payload):
        """Test dot paths including list indices."""
        assert find_json_matches(payload, "data.price") == [42.5]
        assert find_json_matches(payload, "data.items.1.id") == [2]
        assert find_json_matches(payload, "data.missing") == []
        assert find_json_matches(payload, "data.items.9") == []

    def test_jsonpath(self, payload):
        """Test JSONPath expressions."""
        assert find_json_matches(payload, "$.data.name") == ["BTC"]
        assert find_json_matches(payload, "$.data.items[*].id") == [1, 2]

    def test_invalid_jsonpath_raises(self, payload):
        """Test a JSONPath expression that cannot be parsed."""
        with pytest.raises(ExtractionError, match="JSONPath selector error"):
            find_json_matches(payload, "$.data[")

    def test_extract_value(self, payload):
        """Test values are rendered for comparison."""
        assert extract_json_value(payload, "$.data.name") == "BTC"
        assert extract_json_value(payload, "data.price") == "42.5"
        assert extract_json_value(payload, "data.items.0") == '{"id":1}'
        assert extract_json_value(payload, "$.data.items[*].id") == "[1, 2]"
        assert extract_json_value(payload, "$.data.nothing") is None

    def test_format_json_value(self):
        """Test strings stay raw while other values become JSON."""
        assert format_json_value("text") == "text"
        assert format_json_value(True) == "true"
        assert format_json_value(None) == "null"
        assert format_json_value(["ä", 1]) == '["ä",1]'
