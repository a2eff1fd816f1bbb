"""Tests for operation dispatch."""

import json

import pytest

from zigi_shopify_mcp.api.dispatcher import Dispatcher
from zigi_shopify_mcp.api.transport import Response
from zigi_shopify_mcp.exceptions import (
    ApiError,
    DecodeError,
    InvalidArgumentsError,
    RateLimitError,
    TransportError,
    UnknownOperationError,
)


@pytest.fixture
def dispatch(private_config, catalog, retry_policy, make_transport):
    """Build a dispatcher over a scripted transport."""

    def factory(outcomes):
        transport = make_transport(outcomes)
        return Dispatcher(private_config, catalog, transport, retry_policy), transport

    return factory


class TestInvoke:
    """Test successful invocations."""

    def test_get_shop_is_unwrapped(self, dispatch, make_response):
        dispatcher, transport = dispatch([make_response({"shop": {"id": 1, "name": "Acme"}})])

        assert dispatcher.invoke("getShop") == {"id": 1, "name": "Acme"}
        assert transport.requests[0].url == "https://acme.myshopify.com/admin/shop.json"

    def test_create_product_wraps_and_unwraps(self, dispatch, make_response):
        dispatcher, transport = dispatch([make_response({"product": {"id": 9, "title": "x"}}, status_code=201)])

        result = dispatcher.invoke("createProduct", {"title": "x"})

        assert result == {"id": 9, "title": "x"}
        assert json.loads(transport.requests[0].body) == {"product": {"title": "x"}}

    def test_operation_without_root_key_returns_whole_body(self, dispatch, make_response):
        dispatcher, _ = dispatch([make_response({})])

        assert dispatcher.invoke("deleteProduct", {"id": 3}) == {}

    def test_args_are_not_mutated(self, dispatch, make_response):
        dispatcher, _ = dispatch([make_response({"products": []})])
        args = {"limit": 10}

        dispatcher.invoke("getProducts", args)

        assert args == {"limit": 10}

    def test_rate_limit_is_retried_transparently(self, dispatch, make_response, sleep):
        dispatcher, transport = dispatch([Response(429), make_response({"shop": {"id": 1}})])

        assert dispatcher.invoke("getShop") == {"id": 1}
        assert len(transport.requests) == 2
        sleep.assert_called_once_with(1.0)


class TestInvokeErrors:
    """Test the error taxonomy."""

    def test_unknown_operation_sends_nothing(self, dispatch):
        dispatcher, transport = dispatch([])

        with pytest.raises(UnknownOperationError):
            dispatcher.invoke("getUnicorns")

        assert transport.requests == []

    def test_missing_arguments_send_nothing(self, dispatch):
        dispatcher, transport = dispatch([])

        with pytest.raises(InvalidArgumentsError):
            dispatcher.invoke("getProduct")

        assert transport.requests == []

    def test_api_error_is_not_retried(self, dispatch, make_response, sleep):
        dispatcher, transport = dispatch([make_response({"errors": {"title": ["can't be blank"]}}, status_code=422)])

        with pytest.raises(ApiError) as exc_info:
            dispatcher.invoke("createProduct", {"title": ""})

        error = exc_info.value
        assert error.status_code == 422
        assert error.operation == "CreateProduct"
        assert error.errors == {"title": ["can't be blank"]}
        assert len(transport.requests) == 1
        sleep.assert_not_called()

    def test_api_error_with_non_json_body(self, dispatch):
        dispatcher, _ = dispatch([Response(502, body=b"Bad Gateway")])

        with pytest.raises(ApiError) as exc_info:
            dispatcher.invoke("getShop")

        assert exc_info.value.status_code == 502
        assert exc_info.value.errors == "Bad Gateway"

    def test_rate_limit_surfaces_after_retries(self, dispatch, make_response):
        responses = [make_response({"errors": "Exceeded 2 calls per second"}, 429, {"Retry-After": "2.0"})] * 6
        dispatcher, transport = dispatch(responses)

        with pytest.raises(RateLimitError) as exc_info:
            dispatcher.invoke("getShop")

        assert exc_info.value.status_code == 429
        assert exc_info.value.retry_after == 2.0
        assert exc_info.value.errors == "Exceeded 2 calls per second"
        assert isinstance(exc_info.value, ApiError)
        assert len(transport.requests) == 6

    def test_transport_error_surfaces_after_retries(self, dispatch):
        dispatcher, transport = dispatch([TransportError("refused")] * 6)

        with pytest.raises(TransportError):
            dispatcher.invoke("getShop")

        assert len(transport.requests) == 6

    def test_missing_root_key_is_decode_error(self, dispatch, make_response):
        dispatcher, _ = dispatch([make_response({"not_shop": {}})])

        with pytest.raises(DecodeError):
            dispatcher.invoke("getShop")

    def test_invalid_json_is_decode_error(self, dispatch):
        dispatcher, _ = dispatch([Response(200, body=b"not json")])

        with pytest.raises(DecodeError):
            dispatcher.invoke("getShop")
