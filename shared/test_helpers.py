"""
Test helper functions and factory methods for the Hello Graph sample.
"""

import json
import uuid
from typing import Dict, Any, Optional, Union
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import httpx
import jwt

from shared.config import ServiceConfig

TEST_TENANT_ID = "tenant-1"
TEST_CLIENT_ID = "client-1"
TEST_CLIENT_SECRET = "s3cr3t-value"
TEST_AUTHORITY_HOST = "https://login.example.test"
TEST_RESOURCE_URL = "https://graph.example.test/v1.0/users?$top=1"


def create_test_config(configured: bool = True, **overrides) -> ServiceConfig:
    """Service config that ignores the process environment for Graph values."""
    values: Dict[str, Any] = {
        "graph_tenant_id": TEST_TENANT_ID if configured else None,
        "graph_client_id": TEST_CLIENT_ID if configured else None,
        "graph_client_secret": TEST_CLIENT_SECRET if configured else None,
        "graph_authority_host": TEST_AUTHORITY_HOST,
        "graph_resource_url": TEST_RESOURCE_URL,
        "graph_timeout_seconds": 5.0,
        "enable_tracing": False,
        "log_level": "debug",
    }
    values.update(overrides)
    return ServiceConfig(service_name="hello", port=7071, _env_file=None, **values)


def create_mock_access_token(client_id: str = TEST_CLIENT_ID, tenant_id: str = TEST_TENANT_ID,
                             expires_in: int = 3600, secret: str = "test-signing-key-0123456789abcdef") -> str:
    """Create an app-only access token like the identity provider issues."""
    now = datetime.now(timezone.utc)
    payload = {
        "aud": "https://graph.microsoft.com",
        "appid": client_id,
        "tid": tenant_id,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def create_token_response(access_token: Optional[str] = None, expires_in: int = 3600) -> Dict[str, Any]:
    """Token endpoint JSON body."""
    return {
        "token_type": "Bearer",
        "expires_in": expires_in,
        "ext_expires_in": expires_in,
        "access_token": access_token or create_mock_access_token(expires_in=expires_in),
    }


def create_graph_users_body() -> str:
    """Raw Graph ``/users?$top=1`` body, formatted the way Graph sends it."""
    return (
        '{"@odata.context":"https://graph.microsoft.com/v1.0/$metadata#users",'
        '"@odata.nextLink":"https://graph.microsoft.com/v1.0/users?$top=1&$skiptoken=X",'
        '"value":[{"id":"5f1c7a2e-0001-4c1b-9d1e-000000000001",'
        '"displayName":"Ada Lovelace","mail":"ada@contoso.example"}]}'
    )


def make_response(status_code: int, content: Union[str, bytes, Dict[str, Any]] = b"",
                  method: str = "GET", url: str = TEST_RESOURCE_URL) -> httpx.Response:
    """Canned httpx response bound to a request."""
    if isinstance(content, dict):
        content = json.dumps(content)
    return httpx.Response(
        status_code=status_code,
        content=content,
        request=httpx.Request(method, url)
    )


def create_mock_http_client(post=None, get=None) -> MagicMock:
    """Stand-in for the shared ``httpx.AsyncClient``.

    ``post``/``get`` may be a response or an exception instance.
    """
    client = MagicMock(spec=httpx.AsyncClient)
    for name, outcome in (("post", post), ("get", get)):
        if isinstance(outcome, BaseException):
            setattr(client, name, AsyncMock(side_effect=outcome))
        else:
            setattr(client, name, AsyncMock(return_value=outcome))
    client.aclose = AsyncMock()
    return client
