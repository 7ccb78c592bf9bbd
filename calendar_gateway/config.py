"""
Centralized configuration management for the calendar gateway.

All environment variables should be accessed through this module.
This provides:
- Default values for ambient settings (logging, port, timeouts)
- Explicit OAuth client structs built once at startup
- Fatal validation of the provider credentials
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from calendar_gateway.utils.error_handler import ConfigurationError

load_dotenv()

# Google adds "openid" and Microsoft drops "offline_access" from the granted
# scope list; oauthlib would otherwise reject the token response.
os.environ.setdefault("OAUTHLIB_RELAX_TOKEN_SCOPE", "1")


class Config:
    """Centralized configuration management"""

    # ═══════════════════════════════════════════════════════════════════
    # Environment & App Settings
    # ═══════════════════════════════════════════════════════════════════

    APP_ENV: str = os.getenv("APP_ENV", "development")  # development | production
    DEBUG: bool = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes")
    PORT: int = int(os.getenv("PORT", "8080"))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # DEBUG | INFO | WARNING | ERROR
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Outbound HTTP (Microsoft Graph)
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

    # ═══════════════════════════════════════════════════════════════════
    # Google OAuth & Calendar
    # ═══════════════════════════════════════════════════════════════════

    GOOGLE_SCOPES = [
        "https://www.googleapis.com/auth/calendar.events",
    ]
    # Fixed policy: events are always created in this zone
    GOOGLE_TIMEZONE: str = "Asia/Ho_Chi_Minh"

    # ═══════════════════════════════════════════════════════════════════
    # Microsoft/Outlook OAuth & Calendar
    # ═══════════════════════════════════════════════════════════════════

    MICROSOFT_TENANT_ID: str = os.getenv("MICROSOFT_TENANT_ID", "common")  # common, organizations, consumers, or tenant ID
    MICROSOFT_SCOPES = [
        "offline_access",  # For refresh tokens
        "User.Read",
        "Calendars.ReadWrite",
    ]
    # Fixed policy: events are always created in this zone
    MICROSOFT_TIMEZONE: str = "Asia/Bangkok"

    # ═══════════════════════════════════════════════════════════════════
    # Helper Methods
    # ═══════════════════════════════════════════════════════════════════

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production mode"""
        return cls.APP_ENV == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development mode"""
        return not cls.is_production()

    @classmethod
    def get_log_level(cls) -> int:
        """Get logging level as int"""
        level_map = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return level_map.get(cls.LOG_LEVEL.upper(), logging.INFO)

    @classmethod
    def print_config_summary(cls):
        """Print configuration summary (safe for logs)"""
        print("\n" + "="*60)
        print("Configuration Summary")
        print("="*60)
        print(f"Environment: {cls.APP_ENV}")
        print(f"Debug Mode: {cls.DEBUG}")
        print(f"Log Level: {cls.LOG_LEVEL}")
        print(f"Port: {cls.PORT}")
        print(f"Google: {'Configured' if os.getenv('GOOGLE_CLIENT_ID') else 'Not configured'}")
        print(f"Microsoft: {'Configured' if os.getenv('MICROSOFT_CLIENT_ID') else 'Not configured'}")
        print(f"Microsoft tenant: {cls.MICROSOFT_TENANT_ID}")
        print("="*60 + "\n")


# ═══════════════════════════════════════════════════════════════════════
# OAuth client configuration
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OAuthClientConfig:
    """Static OAuth client settings for one provider, built once at startup."""

    client_id: str
    client_secret: str
    redirect_uri: str
    tenant_id: Optional[str] = None


_ENV_PREFIXES = {
    "google": "GOOGLE",
    "microsoft": "MICROSOFT",
}


def load_oauth_config(provider: str) -> OAuthClientConfig:
    """
    Build the OAuth client config for `provider` from the environment.

    Raises
    ------
    ConfigurationError
        If any of the client id, secret or redirect URI is missing.
    """
    prefix = _ENV_PREFIXES.get(provider)
    if prefix is None:
        raise ConfigurationError(f"Unknown calendar provider: {provider}")

    names = [f"{prefix}_CLIENT_ID", f"{prefix}_CLIENT_SECRET", f"{prefix}_REDIRECT_URI"]
    values = {name: os.getenv(name, "").strip() for name in names}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    return OAuthClientConfig(
        client_id=values[names[0]],
        client_secret=values[names[1]],
        redirect_uri=values[names[2]],
        tenant_id=os.getenv("MICROSOFT_TENANT_ID", Config.MICROSOFT_TENANT_ID) if provider == "microsoft" else None,
    )
