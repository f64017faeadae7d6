"""
Shared configuration management for the Hello Graph sample.
"""

from typing import NamedTuple, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class CredentialSet(NamedTuple):
    """Tenant/client credentials for the client-credentials grant."""

    tenant_id: str
    client_id: str
    client_secret: SecretStr


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Microsoft Graph (all three must be set for the Graph sample to run)
    graph_tenant_id: Optional[str] = Field(default=None)
    graph_client_id: Optional[str] = Field(default=None)
    graph_client_secret: Optional[SecretStr] = Field(default=None)

    graph_authority_host: str = Field(default="https://login.microsoftonline.com")
    graph_scope: str = Field(default="https://graph.microsoft.com/.default")
    graph_resource_url: str = Field(default="https://graph.microsoft.com/v1.0/users?$top=1")
    graph_timeout_seconds: float = Field(default=10.0, gt=0)

    # Observability
    enable_tracing: bool = Field(default=False)
    otel_exporter: str = Field(default="http://localhost:4317")
    enable_console_tracing: bool = Field(default=False)

    def graph_credentials(self) -> Optional[CredentialSet]:
        """Return the Graph credentials, or None when any of them is missing."""
        secret = self.graph_client_secret.get_secret_value() if self.graph_client_secret else ""
        if not (self.graph_tenant_id and self.graph_client_id and secret):
            return None
        return CredentialSet(
            tenant_id=self.graph_tenant_id,
            client_id=self.graph_client_id,
            client_secret=self.graph_client_secret,
        )

    def token_endpoint(self, tenant_id: str) -> str:
        """Token endpoint of the identity provider for a tenant."""
        return f"{self.graph_authority_host.rstrip('/')}/{tenant_id}/oauth2/v2.0/token"


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
