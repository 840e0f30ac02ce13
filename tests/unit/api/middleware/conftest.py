"""Fixtures for API middleware tests."""

from typing import cast

import pytest
from fastapi import Request
from pytest_mock import MockerFixture, MockType
from starlette.datastructures import URL
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response


@pytest.fixture
def mock_request(mocker: MockerFixture) -> MockType:
    """Create a mock request for the superhero collection.

    Returns:
        MockType: Mock request object with standard HTTP request attributes.
    """
    request = mocker.Mock(spec=Request)
    request.method = "GET"
    request.url = mocker.Mock(spec=URL)
    request.url.path = "/api/superhero"
    request.headers = {"user-agent": "test-client/1.0"}
    request.query_params = {}
    request.client = mocker.Mock()
    request.client.host = "127.0.0.1"
    return cast("MockType", request)


@pytest.fixture
def mock_response(mocker: MockerFixture) -> MockType:
    """Create a mock response with mutable headers.

    Returns:
        MockType: Mock response object.
    """
    response = mocker.Mock(spec=Response)
    response.status_code = 200
    response.headers = {}
    return cast("MockType", response)


@pytest.fixture
def mock_call_next(mocker: MockerFixture, mock_response: MockType) -> MockType:
    """Create a call_next endpoint returning the mock response.

    Returns:
        MockType: Mock call_next function.
    """
    call_next = mocker.AsyncMock(spec=RequestResponseEndpoint)
    call_next.return_value = mock_response
    return cast("MockType", call_next)
