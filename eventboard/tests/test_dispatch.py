"""
Test request classification.
"""
import pytest

from eventboard.services.dispatch import RequestKind, classify_request, parse_id


class TestParseId:
    """Test lenient id parsing."""

    @pytest.mark.parametrize("raw,expected", [("7", 7), (" 12 ", 12), ("0", None), ("-3", None), ("abc", None), ("", None), (None, None)])
    def test_parse_id(self, raw, expected):
        assert parse_id(raw) == expected


class TestClassifyRequest:
    """Test mapping of verb and ids onto request kinds."""

    def test_options_is_preflight(self):
        assert classify_request("OPTIONS", None, None) is RequestKind.PREFLIGHT

    def test_get_without_id_lists(self):
        assert classify_request("GET", None, None) is RequestKind.LIST

    def test_get_with_id(self):
        assert classify_request("GET", 3, None) is RequestKind.GET_ONE

    def test_post_without_form_id_creates(self):
        # a query id does not turn a POST into an update
        assert classify_request("POST", 5, None) is RequestKind.CREATE

    def test_post_with_form_id_updates(self):
        assert classify_request("POST", None, 5) is RequestKind.UPDATE

    def test_put_is_rejected(self):
        assert classify_request("PUT", 1, None) is RequestKind.PUT_REJECTED

    def test_delete(self):
        assert classify_request("delete", 1, None) is RequestKind.DELETE

    @pytest.mark.parametrize("method", ["PATCH", "HEAD", "TRACE"])
    def test_other_verbs_unsupported(self, method):
        assert classify_request(method, None, None) is RequestKind.UNSUPPORTED
