"""
Test path extraction
"""
import pytest

from paperlearner.core.extractor import extract, split_path, validate_path


DOCUMENT = {
    "feed": {
        "entry": [
            {"title": "First", "author": [{"name": "A"}, {"name": "B"}]},
            {"title": "Second", "author": {"name": "C"}},
        ],
        "link": {"@href": "http://example.org", "#text": "home"},
        "count": 2,
        "empty": None,
    }
}


class TestSplitPath:
    """Test path splitting"""

    def test_slash_delimiter(self):
        assert split_path("feed/entry/title") == ["feed", "entry", "title"]

    def test_dot_fallback(self):
        assert split_path("message.title") == ["message", "title"]

    def test_slash_wins_over_dot(self):
        assert split_path("message/created/date-time.v2") == ["message", "created", "date-time.v2"]


class TestValidatePath:
    """Test path validation"""

    def test_valid(self):
        assert validate_path("feed/entry/@href") == ["feed", "entry", "@href"]

    @pytest.mark.parametrize("path", ["", "   ", "feed//title", "feed/@", "feed/en try"])
    def test_invalid(self, path):
        with pytest.raises(ValueError):
            validate_path(path)


class TestExtract:
    """Test extract()"""

    def test_fan_out_preserves_document_order(self):
        assert extract(DOCUMENT, "feed/entry/author/name") == ["A", "B", "C"]

    def test_index_into_list(self):
        assert extract(DOCUMENT, "feed/entry/1/title") == ["Second"]

    def test_index_out_of_range(self):
        assert extract(DOCUMENT, "feed/entry/5/title") == []

    def test_zero_on_single_element(self):
        assert extract(DOCUMENT, "feed/link/0/@href") == ["http://example.org"]

    def test_missing_path(self):
        assert extract(DOCUMENT, "feed/entry/summary") == []

    def test_scalar_in_middle_of_path(self):
        assert extract(DOCUMENT, "feed/count/value") == []

    def test_none_dropped(self):
        assert extract(DOCUMENT, "feed/empty") == []

    def test_terminal_mapping_returned(self):
        assert extract(DOCUMENT, "feed/link") == [{"@href": "http://example.org", "#text": "home"}]

    def test_non_string_scalar(self):
        assert extract(DOCUMENT, "feed.count") == [2]

    def test_json_list_flattened(self):
        document = {"message": {"title": ["Only title"]}}
        assert extract(document, "message/title") == ["Only title"]
