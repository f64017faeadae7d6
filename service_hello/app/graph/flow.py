"""
Token + Graph call sequence used by the hello endpoints.
"""

from typing import Optional

import httpx

from shared.config import BaseConfig, CredentialSet
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from .graph_client import GraphClient
from .models import GraphResult
from .token_client import TokenAcquirer


class GraphSample:
    """Runs the client-credentials grant and, on success, the Graph call."""

    def __init__(self, http_client: httpx.AsyncClient, config: BaseConfig,
                 metrics: Optional[MetricsCollector] = None):
        self.tokens = TokenAcquirer(http_client, config)
        self.graph = GraphClient(http_client, config)
        self.metrics = metrics
        self.logger = get_logger("hello.graph_sample")

    async def run(self, credentials: Optional[CredentialSet]) -> GraphResult:
        if credentials is None:
            return GraphResult.not_configured()

        self.logger.info("Graph credentials found, attempting token request")
        token = await self.tokens.acquire(credentials)
        self._count("graph_token_requests_total", token.outcome.value)
        if not token.ok:
            return GraphResult.from_steps(token)

        call = await self.graph.fetch(token)
        self._count("graph_calls_total", call.outcome.value)
        return GraphResult.from_steps(token, call)

    def _count(self, metric_name: str, outcome: str) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter(metric_name, outcome=outcome)
