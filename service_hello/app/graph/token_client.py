"""
Client-credentials token acquisition against the identity provider.
"""

import json

import httpx

from shared.config import BaseConfig, CredentialSet
from shared.logging import get_logger
from shared.tracing import trace_operation, mark_span_failed
from .models import TokenOutcome, TokenResult


class TokenAcquirer:
    """Exchanges a credential set for a bearer access token.

    A fresh token is requested on every call; nothing is cached. Failures are
    logged and returned as a failed ``TokenResult``, never raised.
    """

    def __init__(self, http_client: httpx.AsyncClient, config: BaseConfig):
        self.http_client = http_client
        self.config = config
        self.logger = get_logger("hello.token_acquirer")

    def _form(self, credentials: CredentialSet) -> dict:
        return {
            "client_id": credentials.client_id,
            "scope": self.config.graph_scope,
            "client_secret": credentials.client_secret.get_secret_value(),
            "grant_type": "client_credentials",
        }

    async def acquire(self, credentials: CredentialSet) -> TokenResult:
        """Request an access token for ``credentials``.

        The credential set is opaque: none of its values reach logs or spans.
        """
        with trace_operation("graph.acquire_token") as span:
            try:
                response = await self.http_client.post(
                    self.config.token_endpoint(credentials.tenant_id),
                    data=self._form(credentials),
                    timeout=self.config.graph_timeout_seconds,
                )
                body = response.text

                if not response.is_success:
                    self.logger.warning("Graph token request failed", status_code=response.status_code)
                    self.logger.debug(
                        "Graph token error response",
                        status_code=response.status_code,
                        body=body
                    )
                    mark_span_failed(span, f"status {response.status_code}")
                    return TokenResult.failure(TokenOutcome.REJECTED, response.status_code)

                payload = json.loads(body)

            except Exception as e:
                # Messages may echo the token URL, which carries the tenant id
                self.logger.error("Error acquiring Graph token", error_type=type(e).__name__)
                mark_span_failed(span, type(e).__name__)
                return TokenResult.failure(TokenOutcome.TRANSPORT_ERROR)

            access_token = payload.get("access_token") if isinstance(payload, dict) else None
            if not isinstance(access_token, str) or not access_token:
                self.logger.warning("Graph token response has no access_token", status_code=response.status_code)
                mark_span_failed(span, "missing access_token")
                return TokenResult.failure(TokenOutcome.MISSING_TOKEN, response.status_code)

            self.logger.info("Graph token acquired")
            return TokenResult.success(access_token, response.status_code)
