import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError

# Load environment variables from .env file if it exists
load_dotenv()


class GatewayConfig(BaseModel):
    """Settings shared by the table gateways of one session."""

    session_actor_id: Optional[int] = Field(
        default_factory=lambda: os.getenv("SQL_GATEWAY_SESSION_ACTOR_ID") or None,
        description="Identifier written to created_by/updated_by audit columns"
    )

    dialect: str = Field(
        default_factory=lambda: os.getenv("SQL_GATEWAY_DIALECT", "sqlite"),
        description="SQL dialect of the target database (sqlite, mysql, postgresql)"
    )

    default_timezone: str = Field(
        default_factory=lambda: os.getenv("SQL_GATEWAY_TIMEZONE", "UTC"),
        description="Timezone of audit timestamps"
    )

    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("SQL_GATEWAY_DEBUG_LOGGING", "false").lower() == "true",
        description="Log every statement and its bind values at DEBUG level"
    )

    autocommit: bool = Field(
        default_factory=lambda: os.getenv("SQL_GATEWAY_AUTOCOMMIT", "true").lower() == "true",
        description="Commit after each successful write when the gateway wraps a raw DB-API connection"
    )

    @field_validator('dialect')
    @classmethod
    def validate_dialect(cls, v):
        """Validate dialect name."""
        # Import here to avoid circular imports (config -> core -> config)
        from ..core.dialects import DIALECTS

        name = v.lower()
        if name not in DIALECTS:
            raise ValueError(f"Dialect must be one of: {sorted(DIALECTS)}")
        return name

    @field_validator('default_timezone')
    @classmethod
    def validate_timezone(cls, v):
        """Validate timezone string."""
        from zoneinfo import ZoneInfo

        try:
            ZoneInfo(v)
        except Exception:
            raise ValueError(f"Invalid timezone: {v}. Please use a valid IANA timezone identifier.") from None
        return v

    @classmethod
    def from_env(cls) -> 'GatewayConfig':
        """Create configuration from environment variables.

        Returns:
            GatewayConfig instance

        Raises:
            ConfigurationError: If an environment value is invalid
        """
        try:
            return cls()
        except PydanticValidationError as e:
            errors = {
                ".".join(str(part) for part in error["loc"]): error["msg"]
                for error in e.errors()
            }
            raise ConfigurationError(
                "Invalid gateway configuration in environment",
                errors=errors,
                original_error=e,
            ) from e

    @classmethod
    def for_local_development(cls) -> 'GatewayConfig':
        """Create configuration for a local SQLite database.

        Returns:
            GatewayConfig instance configured for local development
        """
        return cls(
            dialect="sqlite",
            default_timezone="UTC",
            enable_debug_logging=True,
            autocommit=True
        )

    @classmethod
    def for_actor(cls, actor_id: int, **kwargs) -> 'GatewayConfig':
        """Create configuration whose audit columns record ``actor_id``.

        Args:
            actor_id: Session actor identifier
            **kwargs: Additional configuration parameters

        Returns:
            GatewayConfig instance
        """
        return cls(session_actor_id=actor_id, **kwargs)

    model_config = ConfigDict(
        validate_assignment=True,
        validate_default=True
    )
