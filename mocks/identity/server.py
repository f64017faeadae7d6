"""
Mock identity provider and Graph resource for local runs and tests.
"""

import jwt
from typing import Dict, Any, Optional
from datetime import datetime, timedelta, timezone
from fastapi import FastAPI, Form, Header, HTTPException, Query

from shared.logging import get_logger


class MockIdentityServer:
    """Mock identity provider plus a tiny Graph users collection."""

    def __init__(self, port: int = 8090, tenant_id: str = "mock-tenant",
                 client_id: str = "mock-client", client_secret: str = "mock-secret"):
        self.port = port
        self.logger = get_logger("mock.identity")
        self.app = FastAPI(title="Mock Identity", version="1.0.0")

        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.issuer = f"http://localhost:{port}/{tenant_id}/v2.0"

        # Mock signing key (HS256)
        self.private_key = "mock-identity-signing-key-0123456789abcdef"
        self.issued_tokens = 0

        self.users = [
            {
                "id": "5f1c7a2e-0001-4c1b-9d1e-000000000001",
                "displayName": "Ada Lovelace",
                "userPrincipalName": "ada@contoso.example",
                "mail": "ada@contoso.example"
            },
            {
                "id": "5f1c7a2e-0002-4c1b-9d1e-000000000002",
                "displayName": "Alan Turing",
                "userPrincipalName": "alan@contoso.example",
                "mail": "alan@contoso.example"
            }
        ]

        self._setup_routes()

    def _setup_routes(self):
        """Set up mock routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "mock-identity",
                "message": "Mock identity provider for the Hello Graph sample",
                "version": "1.0.0",
                "tenant": self.tenant_id,
                "issuer": self.issuer
            }

        @self.app.post("/{tenant}/oauth2/v2.0/token")
        async def token_endpoint(
            tenant: str,
            grant_type: str = Form(...),
            client_id: str = Form(...),
            client_secret: Optional[str] = Form(None),
            scope: Optional[str] = Form(None)
        ):
            """Token endpoint for the client-credentials grant."""
            if tenant != self.tenant_id:
                raise HTTPException(status_code=400, detail="invalid_tenant")
            if grant_type != "client_credentials":
                raise HTTPException(status_code=400, detail="unsupported_grant_type")
            if client_id != self.client_id or client_secret != self.client_secret:
                raise HTTPException(status_code=401, detail="invalid_client")

            return self._issue_token(scope or "")

        @self.app.get("/v1.0/users")
        async def list_users(
            authorization: Optional[str] = Header(None),
            top: int = Query(100, alias="$top", ge=1)
        ):
            """Graph users collection."""
            if not authorization or not authorization.startswith("Bearer "):
                raise HTTPException(status_code=401, detail="InvalidAuthenticationToken")

            try:
                jwt.decode(
                    authorization[len("Bearer "):],
                    self.private_key,
                    algorithms=["HS256"],
                    audience="https://graph.microsoft.com"
                )
            except jwt.InvalidTokenError:
                raise HTTPException(status_code=401, detail="InvalidAuthenticationToken")

            return {
                "@odata.context": "https://graph.microsoft.com/v1.0/$metadata#users",
                "value": self.users[:top]
            }

    def _issue_token(self, scope: str) -> Dict[str, Any]:
        """Sign an app-only access token."""
        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.issuer,
            "sub": self.client_id,
            "aud": "https://graph.microsoft.com",
            "appid": self.client_id,
            "tid": self.tenant_id,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(hours=1)).timestamp()),
            "scp": scope,
            "roles": ["User.Read.All"]
        }
        self.issued_tokens += 1
        self.logger.info("Issued client-credentials token", client_id=self.client_id)

        return {
            "token_type": "Bearer",
            "expires_in": 3600,
            "ext_expires_in": 3600,
            "access_token": jwt.encode(payload, self.private_key, algorithm="HS256")
        }


def create_app():
    """Create mock identity application."""
    server = MockIdentityServer()
    return server.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8090)
