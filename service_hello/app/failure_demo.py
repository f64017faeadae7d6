"""
Deliberate failure used by ``/hello/error`` to exercise error reporting.

The raised error is chained to an inner fault so logs and traces carry both
stack traces.
"""

from typing import Optional

from shared.errors import HelloServiceException
from shared.logging import get_logger

logger = get_logger("hello.failure_demo")


class DemoFailureError(HelloServiceException):
    """The failure ``/hello/error`` always ends with."""

    def __init__(self, request_id: str):
        super().__init__(
            "DEMO_FAILURE",
            f"Demo error occurred for RequestId={request_id}",
            details={"request_id": request_id},
            status_code=500
        )


def log_demo_steps():
    logger.debug("Step 1: validate input")
    logger.debug("Step 2: prepare payload")
    logger.debug("Step 3: call downstream service (simulated)")


def cause_inner_failure() -> int:
    payload: Optional[dict] = None
    # TypeError: 'NoneType' object is not subscriptable
    return len(payload["name"])


def trigger_demo_exception(request_id: str):
    logger.error("TriggerDemoException: preparing to throw", request_id=request_id)
    try:
        cause_inner_failure()
    except TypeError as exc:
        raise DemoFailureError(request_id) from exc
