"""
Test: option text normalization used on both sides of every answer comparison.
"""
from services.option_text import get_option_text, option_texts


class TestGetOptionText:
    def test_plain_values(self):
        assert get_option_text("Paris") == "Paris"
        assert get_option_text(42) == "42"
        assert get_option_text(2.5) == "2.5"
        assert get_option_text(True) == "true"

    def test_none_is_empty(self):
        assert get_option_text(None) == ""

    def test_whole_float_reads_like_int(self):
        assert get_option_text(4.0) == "4"

    def test_field_priority(self):
        assert get_option_text({"text": "A", "label": "B"}) == "A"
        assert get_option_text({"label": "Paris", "isCorrect": True}) == "Paris"
        assert get_option_text({"value": 3}) == "3"
        assert get_option_text({"answer": "yes"}) == "yes"
        assert get_option_text({"_id": "abc123"}) == "abc123"

    def test_null_field_falls_through(self):
        assert get_option_text({"text": None, "label": "L"}) == "L"

    def test_sequence_joined(self):
        assert get_option_text(["a", {"text": "b"}, 3]) == "a, b, 3"

    def test_unknown_mapping_is_stable(self):
        assert get_option_text({"b": 1, "a": 2}) == get_option_text({"a": 2, "b": 1})


class TestOptionTexts:
    def test_list_is_stripped(self):
        assert option_texts([" x ", {"text": "y "}]) == ["x", "y"]

    def test_scalar_becomes_single_item(self):
        assert option_texts("x") == ["x"]

    def test_none_is_empty(self):
        assert option_texts(None) == []
