"""
Hello service for the Hello Graph sample.
"""

from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import Query, Request

from shared.base_service import BaseService
from shared.config import CredentialSet, ServiceConfig
from shared.logging import get_request_id, set_request_id
from .background import BackgroundTaskScope
from .failure_demo import log_demo_steps, trigger_demo_exception
from .graph import GraphSample
from .greeting import build_greeting, resolve_name


class HelloService(BaseService):
    """Hello service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None,
                 http_client: Optional[httpx.AsyncClient] = None):
        super().__init__("hello", 7071, config)

        # One outbound client for the whole process; only closed here if we made it
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=self.config.graph_timeout_seconds
        )
        self.graph_sample = GraphSample(self.http_client, self.config, self.metrics)
        self.background = BackgroundTaskScope(self.metrics)

        self._setup_hello_routes()

    def _setup_hello_routes(self):
        """Set up hello-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "hello",
                "message": "Hello Graph sample - Hello Service",
                "version": "1.0.0"
            }

        @self.app.api_route("/hello/success", methods=["GET", "POST"])
        async def hello_success(request: Request, name: Optional[str] = Query(None)):
            """Greeting endpoint with the optional Graph sample."""
            self.logger.info("HelloSuccess invoked")

            name = resolve_name(name, await request.body())
            self.logger.info("Processed HelloSuccess request", name=name or "(none)")

            message = build_greeting(name)
            result = await self.graph_sample.run(self.config.graph_credentials())

            return {
                "message": message,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "graph": result.describe()
            }

        @self.app.get("/hello/error")
        async def hello_error():
            """Endpoint that always fails, for exercising error reporting."""
            self.logger.info("HelloError invoked, demonstrating error flow")
            log_demo_steps()

            request_id = get_request_id() or set_request_id()
            self.logger.info("Starting failure demo", request_id=request_id)

            credentials = self.config.graph_credentials()
            if credentials is not None:
                self.background.spawn(
                    self._background_graph_call(credentials),
                    name=f"graph-sample-{request_id}"
                )

            trigger_demo_exception(request_id)

    async def _background_graph_call(self, credentials: CredentialSet) -> None:
        result = await self.graph_sample.run(credentials)
        length = len(result.body) if result.ok else 0
        self.logger.info("Background Graph call result", length=length, outcome=result.outcome.value)

    async def on_shutdown(self) -> None:
        await self.background.shutdown()
        if self._owns_http_client:
            await self.http_client.aclose()

    async def _check_dependencies(self):
        """Report whether the Graph sample is configured; no network probe."""
        configured = self.config.graph_credentials() is not None
        return {"graph": "configured" if configured else "not_configured"}


def create_app(config: Optional[ServiceConfig] = None,
               http_client: Optional[httpx.AsyncClient] = None):
    """Create FastAPI application."""
    service = HelloService(config=config, http_client=http_client)
    return service.app


if __name__ == "__main__":
    service = HelloService()
    service.run()
