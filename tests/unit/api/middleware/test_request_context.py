"""Unit tests for RequestContextMiddleware."""

import uuid

import pytest
from loguru import logger
from pytest_mock import MockerFixture, MockType
from starlette.requests import Request
from starlette.responses import Response

from superhero_api.api.constants import CORRELATION_ID_HEADER
from superhero_api.api.middleware.request_context import RequestContextMiddleware
from superhero_api.core.context import RequestContext


@pytest.mark.unit
class TestRequestContextMiddleware:
    """Test correlation ID handling."""

    async def test_uses_incoming_header(
        self,
        mock_app: MockType,
        mock_request: MockType,
        mock_response: MockType,
        mock_call_next: MockType,
    ) -> None:
        """Test a supplied correlation ID is kept and echoed."""
        mock_request.headers = {CORRELATION_ID_HEADER: "corr-123"}
        middleware = RequestContextMiddleware(mock_app)

        result = await middleware.dispatch(mock_request, mock_call_next)

        assert result is mock_response
        assert mock_response.headers[CORRELATION_ID_HEADER] == "corr-123"
        assert RequestContext.get_correlation_id() == "corr-123"

    async def test_generates_when_missing(
        self,
        mock_app: MockType,
        mock_request: MockType,
        mock_response: MockType,
        mock_call_next: MockType,
    ) -> None:
        """Test a UUID4 correlation ID is generated when none is supplied."""
        mock_request.headers = {}
        middleware = RequestContextMiddleware(mock_app)

        await middleware.dispatch(mock_request, mock_call_next)

        correlation_id = mock_response.headers[CORRELATION_ID_HEADER]
        assert uuid.UUID(correlation_id).version == 4

    async def test_binds_correlation_id_to_logs(
        self, mock_app: MockType, mock_request: MockType, mocker: MockerFixture
    ) -> None:
        """Test log records emitted downstream carry the correlation ID."""
        mock_request.headers = {CORRELATION_ID_HEADER: "corr-log"}
        records: list[dict[str, object]] = []
        sink_id = logger.add(lambda message: records.append(message.record["extra"]))

        async def call_next(_: Request) -> Response:
            logger.info("inside request")
            return mocker.Mock(spec=Response, headers={})

        try:
            await RequestContextMiddleware(mock_app).dispatch(mock_request, call_next)
        finally:
            logger.remove(sink_id)

        assert records[0]["correlation_id"] == "corr-log"
