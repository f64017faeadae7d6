"""
Unit tests for the token + Graph call sequence.
"""

import pytest
import httpx

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_hello.app.graph import (
    CALL_FAILED_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
    TOKEN_FAILED_MESSAGE,
    GraphOutcome,
    GraphResult,
    GraphSample,
    ResultAccessError,
    TokenResult,
)
from shared.metrics import MetricsCollector
from shared.test_helpers import (
    create_graph_users_body,
    create_mock_http_client,
    create_test_config,
    create_token_response,
    make_response,
)


@pytest.fixture
def metrics():
    """Metrics collector with its own registry."""
    return MetricsCollector("hello")


def _sample(metrics, post=None, get=None):
    config = create_test_config()
    return GraphSample(create_mock_http_client(post=post, get=get), config, metrics), config


@pytest.mark.asyncio
async def test_not_configured_makes_no_calls(metrics):
    """Test missing credentials skip the network entirely."""
    sample, _ = _sample(metrics)

    result = await sample.run(None)

    assert result.outcome is GraphOutcome.NOT_CONFIGURED
    assert result.describe() == NOT_CONFIGURED_MESSAGE
    sample.tokens.http_client.post.assert_not_awaited()
    sample.tokens.http_client.get.assert_not_awaited()


@pytest.mark.asyncio
async def test_token_failure_skips_graph_call(metrics):
    """Test the Graph call is never attempted without a token."""
    sample, config = _sample(metrics, post=make_response(400, {"error": "invalid_request"}, "POST"))

    result = await sample.run(config.graph_credentials())

    assert result.outcome is GraphOutcome.TOKEN_FAILED
    assert result.describe() == TOKEN_FAILED_MESSAGE
    sample.graph.http_client.get.assert_not_awaited()
    assert metrics.sample_value("graph_token_requests_total", {"outcome": "rejected"}) == 1.0
    assert metrics.sample_value("graph_calls_total", {"outcome": "success"}) is None


@pytest.mark.asyncio
async def test_graph_failure_reported(metrics):
    """Test a failed Graph call after a good token."""
    sample, config = _sample(
        metrics,
        post=make_response(200, create_token_response("tok-123"), "POST"),
        get=httpx.ConnectError("Connection refused"),
    )

    result = await sample.run(config.graph_credentials())

    assert result.outcome is GraphOutcome.CALL_FAILED
    assert result.describe() == CALL_FAILED_MESSAGE
    assert metrics.sample_value("graph_calls_total", {"outcome": "transport_error"}) == 1.0


@pytest.mark.asyncio
async def test_graph_empty_reported_as_failure(metrics):
    """Test an empty Graph body is reported like a failure."""
    sample, config = _sample(
        metrics,
        post=make_response(200, create_token_response("tok-123"), "POST"),
        get=make_response(200, b""),
    )

    result = await sample.run(config.graph_credentials())

    assert result.describe() == CALL_FAILED_MESSAGE


@pytest.mark.asyncio
async def test_success_returns_body_byte_for_byte(metrics):
    """Test the raw Graph body is what gets reported."""
    body = create_graph_users_body()
    sample, config = _sample(
        metrics,
        post=make_response(200, create_token_response("tok-123"), "POST"),
        get=make_response(200, body),
    )

    result = await sample.run(config.graph_credentials())

    assert result.ok is True
    assert result.describe() == body
    assert result.body == body
    assert metrics.sample_value("graph_token_requests_total", {"outcome": "success"}) == 1.0
    assert metrics.sample_value("graph_calls_total", {"outcome": "success"}) == 1.0


@pytest.mark.asyncio
async def test_fresh_token_every_run(metrics):
    """Test tokens are not reused between runs."""
    sample, config = _sample(
        metrics,
        post=make_response(200, create_token_response("tok-123"), "POST"),
        get=make_response(200, create_graph_users_body()),
    )

    await sample.run(config.graph_credentials())
    await sample.run(config.graph_credentials())

    assert sample.tokens.http_client.post.await_count == 2


def test_graph_result_success_needs_token():
    """Test a failed token always folds to TOKEN_FAILED."""
    from service_hello.app.graph import CallResult, TokenOutcome

    result = GraphResult.from_steps(
        TokenResult.failure(TokenOutcome.MISSING_TOKEN, 200),
        CallResult.success("{}"),
    )

    assert result.outcome is GraphOutcome.TOKEN_FAILED
    with pytest.raises(ResultAccessError):
        result.body
