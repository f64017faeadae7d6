"""
Hello service package for the Hello Graph sample.

- app.main: Application entrypoint that wires routes and lifecycle.
- app.graph: Client-credentials token acquisition and the Graph call.
- app.greeting: Greeting text and name resolution.
- app.failure_demo: The deliberate failure behind ``/hello/error``.
- app.background: Task scope that ties background work to shutdown.

Design notes:
- Module import must not perform network calls. The shared outbound HTTP
  client is created with the service and closed on shutdown.
- Use the shared/ utilities for logging, metrics, tracing, and errors.
- Stateless across requests; a fresh token is requested every time.
"""
