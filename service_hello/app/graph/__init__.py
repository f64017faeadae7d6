"""
Graph sample package.

- token_client: OAuth2 client-credentials token acquisition.
- graph_client: bearer-authenticated GET against the Graph resource.
- flow: the two steps in order, folded into a ``GraphResult``.
- models: tagged result types and the user-facing failure texts.

Nothing here raises on network or provider failures; callers inspect the
result outcome instead.
"""

from .flow import GraphSample
from .graph_client import GraphClient
from .models import (
    CALL_FAILED_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
    TOKEN_FAILED_MESSAGE,
    CallOutcome,
    CallResult,
    GraphOutcome,
    GraphResult,
    ResultAccessError,
    TokenOutcome,
    TokenResult,
)
from .token_client import TokenAcquirer

__all__ = [
    "GraphSample",
    "GraphClient",
    "TokenAcquirer",
    "TokenResult",
    "TokenOutcome",
    "CallResult",
    "CallOutcome",
    "GraphResult",
    "GraphOutcome",
    "ResultAccessError",
    "NOT_CONFIGURED_MESSAGE",
    "TOKEN_FAILED_MESSAGE",
    "CALL_FAILED_MESSAGE",
]
