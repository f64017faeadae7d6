"""
Authenticated call to the Graph resource.
"""

import httpx

from shared.config import BaseConfig
from shared.logging import get_logger
from shared.tracing import trace_operation, mark_span_failed
from .models import CallOutcome, CallResult, TokenResult


class GraphClient:
    """Issues one bearer-authenticated GET against the configured resource.

    The response body is returned as-is; its shape is never inspected.
    """

    def __init__(self, http_client: httpx.AsyncClient, config: BaseConfig):
        self.http_client = http_client
        self.config = config
        self.logger = get_logger("hello.graph_client")

    async def fetch(self, token: TokenResult) -> CallResult:
        """GET the resource with the token from a successful ``TokenResult``."""
        headers = {"Authorization": f"Bearer {token.access_token}"}

        with trace_operation("graph.call_resource") as span:
            try:
                response = await self.http_client.get(
                    self.config.graph_resource_url,
                    headers=headers,
                    timeout=self.config.graph_timeout_seconds,
                )
                body = response.text
            except Exception as e:
                self.logger.error(
                    "Error calling Graph API",
                    error=str(e),
                    error_type=type(e).__name__
                )
                mark_span_failed(span, type(e).__name__)
                return CallResult.failure(CallOutcome.TRANSPORT_ERROR)

            if not response.is_success:
                self.logger.warning("Graph API call failed", status_code=response.status_code)
                self.logger.debug("Graph API error response", status_code=response.status_code, body=body)
                mark_span_failed(span, f"status {response.status_code}")
                return CallResult.failure(CallOutcome.REJECTED, response.status_code)

            if not body:
                self.logger.warning("Graph API returned an empty body", status_code=response.status_code)
                return CallResult.failure(CallOutcome.EMPTY, response.status_code)

            return CallResult.success(body, response.status_code)
