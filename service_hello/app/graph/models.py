"""
Result types for the Graph sample.

Every outbound step reports a tagged result instead of ``None``: the outcome
says what happened, and the payload (token or body) can only be read from a
successful result.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

NOT_CONFIGURED_MESSAGE = (
    "Graph credentials not configured "
    "(set GRAPH_TENANT_ID, GRAPH_CLIENT_ID, GRAPH_CLIENT_SECRET)"
)
TOKEN_FAILED_MESSAGE = "Failed to acquire token"
CALL_FAILED_MESSAGE = "Graph call failed or returned empty"


class TokenOutcome(str, Enum):
    """Outcome of a client-credentials token request."""

    SUCCESS = "success"
    MISSING_TOKEN = "missing_token"
    REJECTED = "rejected"
    TRANSPORT_ERROR = "transport_error"


class CallOutcome(str, Enum):
    """Outcome of an authenticated Graph resource call."""

    SUCCESS = "success"
    EMPTY = "empty"
    REJECTED = "rejected"
    TRANSPORT_ERROR = "transport_error"


class GraphOutcome(str, Enum):
    """Outcome of the whole token + call sequence."""

    SUCCESS = "success"
    NOT_CONFIGURED = "not_configured"
    TOKEN_FAILED = "token_failed"
    CALL_FAILED = "call_failed"


class ResultAccessError(RuntimeError):
    """Raised when reading the payload of an unsuccessful result."""


@dataclass(frozen=True)
class TokenResult:
    outcome: TokenOutcome
    status_code: Optional[int] = None
    _access_token: Optional[str] = None

    @classmethod
    def success(cls, access_token: str, status_code: int = 200) -> "TokenResult":
        return cls(TokenOutcome.SUCCESS, status_code, access_token)

    @classmethod
    def failure(cls, outcome: TokenOutcome, status_code: Optional[int] = None) -> "TokenResult":
        if outcome is TokenOutcome.SUCCESS:
            raise ValueError("failure() needs a failing outcome")
        return cls(outcome, status_code)

    @property
    def ok(self) -> bool:
        return self.outcome is TokenOutcome.SUCCESS

    @property
    def access_token(self) -> str:
        if not self.ok:
            raise ResultAccessError(f"no access token: {self.outcome.value}")
        return self._access_token

    def __repr__(self) -> str:
        return f"TokenResult(outcome={self.outcome.value}, status_code={self.status_code})"


@dataclass(frozen=True)
class CallResult:
    outcome: CallOutcome
    status_code: Optional[int] = None
    _body: Optional[str] = None

    @classmethod
    def success(cls, body: str, status_code: int = 200) -> "CallResult":
        return cls(CallOutcome.SUCCESS, status_code, body)

    @classmethod
    def failure(cls, outcome: CallOutcome, status_code: Optional[int] = None) -> "CallResult":
        if outcome is CallOutcome.SUCCESS:
            raise ValueError("failure() needs a failing outcome")
        return cls(outcome, status_code)

    @property
    def ok(self) -> bool:
        return self.outcome is CallOutcome.SUCCESS

    @property
    def body(self) -> str:
        if not self.ok:
            raise ResultAccessError(f"no response body: {self.outcome.value}")
        return self._body

    def __repr__(self) -> str:
        return f"CallResult(outcome={self.outcome.value}, status_code={self.status_code})"


@dataclass(frozen=True)
class GraphResult:
    outcome: GraphOutcome
    token: Optional[TokenResult] = None
    call: Optional[CallResult] = None

    @classmethod
    def not_configured(cls) -> "GraphResult":
        return cls(GraphOutcome.NOT_CONFIGURED)

    @classmethod
    def from_steps(cls, token: TokenResult, call: Optional[CallResult] = None) -> "GraphResult":
        """Fold the step results; success needs a good token and a good call."""
        if not token.ok:
            return cls(GraphOutcome.TOKEN_FAILED, token)
        if call is None or not call.ok:
            return cls(GraphOutcome.CALL_FAILED, token, call)
        return cls(GraphOutcome.SUCCESS, token, call)

    @property
    def ok(self) -> bool:
        return self.outcome is GraphOutcome.SUCCESS

    @property
    def body(self) -> str:
        if not self.ok:
            raise ResultAccessError(f"no Graph response: {self.outcome.value}")
        return self.call.body

    def describe(self) -> str:
        """Text reported in the ``graph`` field of the greeting response."""
        if self.outcome is GraphOutcome.SUCCESS:
            return self.call.body
        if self.outcome is GraphOutcome.NOT_CONFIGURED:
            return NOT_CONFIGURED_MESSAGE
        if self.outcome is GraphOutcome.TOKEN_FAILED:
            return TOKEN_FAILED_MESSAGE
        return CALL_FAILED_MESSAGE
