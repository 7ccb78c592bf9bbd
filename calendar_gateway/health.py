import logging
import time
from typing import Dict, Any, Mapping
from datetime import datetime, timezone

from .config import Config
from .services.calendar.base_provider import CalendarProvider
from .services.calendar.credential_store import ProcessSingletonStore

logger = logging.getLogger(__name__)

class HealthChecker:
    """Application health monitoring"""

    def __init__(self, providers: Mapping[str, CalendarProvider]):
        self.start_time = time.time()
        self.providers = providers

    def check_providers(self) -> Dict[str, Any]:
        """Report which providers are wired up and whether a credential is held"""
        status = {}
        for name, provider in self.providers.items():
            store = provider.credential_store
            status[name] = {
                "configured": bool(provider.config.client_id),
                # Only meaningful for the process-wide slot
                "authenticated": store.is_authenticated if isinstance(store, ProcessSingletonStore) else None,
            }
        return status

    def get_health_status(self) -> Dict[str, Any]:
        """Overall health payload for /health"""
        return {
            "status": "healthy",
            "environment": Config.APP_ENV,
            "uptime_seconds": round(time.time() - self.start_time, 1),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "providers": self.check_providers(),
        }
