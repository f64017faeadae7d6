"""
Tests for the deliberate failure chain.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_hello.app.failure_demo import DemoFailureError, cause_inner_failure, trigger_demo_exception
from shared.errors import HelloServiceException


def test_inner_failure_raises_type_error():
    """Test the inner fault."""
    with pytest.raises(TypeError):
        cause_inner_failure()


def test_demo_exception_is_chained():
    """Test the outer error wraps the inner fault and carries the request id."""
    with pytest.raises(DemoFailureError) as exc_info:
        trigger_demo_exception("req-42")

    error = exc_info.value
    assert isinstance(error, HelloServiceException)
    assert isinstance(error.__cause__, TypeError)
    assert error.status_code == 500
    assert error.code == "DEMO_FAILURE"
    assert error.message == "Demo error occurred for RequestId=req-42"
    assert error.details == {"request_id": "req-42"}
