"""Tests for the MCP error handling decorator."""

import json

from zigi_shopify_mcp.exceptions import ConfigError, DecodeError, TransportError
from zigi_shopify_mcp.utils.decorators import format_success_response, handle_shopify_errors


def failing(error):
    @handle_shopify_errors
    def tool() -> str:
        raise error

    return tool


def test_passes_through_results():
    @handle_shopify_errors
    def tool() -> str:
        return "ok"

    assert tool() == "ok"
    assert tool.__name__ == "tool"


def test_transport_error_is_network_error():
    result = json.loads(failing(TransportError("refused"))())

    assert result["success"] is False
    assert result["error"] == "network_error"
    assert "request_id" in result["metadata"]


def test_config_error():
    assert json.loads(failing(ConfigError("no shop"))())["error"] == "config_error"


def test_decode_error():
    assert json.loads(failing(DecodeError("bad json"))())["error"] == "decode_error"


def test_unexpected_error():
    result = json.loads(failing(RuntimeError("boom"))())

    assert result["error"] == "unexpected_error"
    assert "boom" in result["message"]


def test_format_success_response():
    result = json.loads(format_success_response({"id": 1}, metadata={"operation": "getShop"}))

    assert result["success"] is True
    assert result["data"] == {"id": 1}
    assert result["metadata"]["operation"] == "getShop"
    assert "timestamp" in result["metadata"]


def test_error_envelope_describes_error_code():
    result = json.loads(failing(TransportError("refused"))())

    assert result["error_description"] == "Connection issues"
