"""Shared fixtures for the Shopify client tests."""

import json
from unittest.mock import Mock

import pytest

from zigi_shopify_mcp.api.retry import RetryPolicy
from zigi_shopify_mcp.api.transport import Response
from zigi_shopify_mcp.catalog import OperationCatalog
from zigi_shopify_mcp.config import ConnectionConfig


class FakeTransport:
    """Transport that replays scripted responses and records every request."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    def send(self, request):
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def json_response(body, status_code=200, headers=None):
    return Response(
        status_code=status_code,
        headers={"Content-Type": "application/json", **(headers or {})},
        body=json.dumps(body).encode("utf-8"),
    )


@pytest.fixture
def make_transport():
    """Build a FakeTransport from a list of Responses and exceptions."""
    return FakeTransport


@pytest.fixture
def make_response():
    """Build a JSON Response."""
    return json_response


@pytest.fixture
def private_config():
    return ConnectionConfig.from_options(
        {"shop": "acme", "private_app": True, "api_key": "test_key", "password": "test_password"}
    )


@pytest.fixture
def public_config():
    return ConnectionConfig.from_options(
        {"shop": "acme.myshopify.com", "private_app": False, "access_token": "test_access_token"}
    )


@pytest.fixture(scope="session")
def catalog():
    return OperationCatalog.load()


@pytest.fixture
def sleep():
    return Mock()


@pytest.fixture
def retry_policy(sleep):
    """RetryPolicy that records delays instead of sleeping."""
    return RetryPolicy(sleep=sleep)
