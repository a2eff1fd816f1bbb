"""Tests for root-key wrapping and unwrapping."""

import pytest

from zigi_shopify_mcp.api.envelope import decode_body, unwrap, wrap
from zigi_shopify_mcp.api.transport import Response
from zigi_shopify_mcp.exceptions import DecodeError


class TestWrap:
    """Test request body wrapping."""

    def test_post_body_is_nested_under_root_key(self):
        assert wrap({"title": "x"}, "product", "POST") == {"product": {"title": "x"}}

    def test_put_body_is_nested_under_root_key(self):
        assert wrap({"id": 1, "title": "y"}, "product", "PUT") == {"product": {"id": 1, "title": "y"}}

    def test_no_root_key_is_identity(self):
        body = {"delegate_access_scope": ["read_products"]}

        assert wrap(body, None, "POST") is body

    @pytest.mark.parametrize("method", ["GET", "DELETE"])
    def test_read_and_delete_verbs_are_never_wrapped(self, method):
        body = {"title": "x"}

        assert wrap(body, "product", method) is body


class TestUnwrap:
    """Test response unwrapping."""

    def test_returns_value_under_root_key(self):
        assert unwrap({"shop": {"id": 1}}, "shop") == {"id": 1}

    def test_no_root_key_returns_whole_body(self):
        assert unwrap({"tags": ["a", "b"]}, None) == {"tags": ["a", "b"]}

    def test_missing_root_key_is_decode_error(self):
        with pytest.raises(DecodeError, match="product") as exc_info:
            unwrap({"errors": "Not Found"}, "product", operation="GetProduct")

        assert exc_info.value.operation == "GetProduct"

    def test_non_object_payload_is_decode_error(self):
        with pytest.raises(DecodeError):
            unwrap(["a"], "products")


class TestDecodeBody:
    """Test JSON decoding of response bodies."""

    def test_decodes_json(self):
        assert decode_body(Response(200, {}, b'{"shop": {"id": 1}}')) == {"shop": {"id": 1}}

    def test_empty_body_decodes_to_empty_dict(self):
        assert decode_body(Response(200, {}, b"")) == {}

    def test_invalid_json_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_body(Response(200, {}, b"<html>Bad Gateway</html>"))

    def test_invalid_utf8_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_body(Response(200, {}, b"{\"title\": \"\x80\"}"))
