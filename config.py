import os
from typing import Optional

import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth_events.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", 1))

    # Webhook ingestion
    WEBHOOK_SECRETS = data.get("WEBHOOK_SECRETS", {}) or {}
    WEBHOOK_TOLERANCE_SECONDS = int(data.get("WEBHOOK_TOLERANCE_SECONDS", 300))
    TRANSACTION_MAX_WAIT_MS = int(data.get("TRANSACTION_MAX_WAIT_MS", 5000))
    TRANSACTION_TIMEOUT_MS = int(data.get("TRANSACTION_TIMEOUT_MS", 10000))

    # Export
    EXPORT_ROW_LIMIT = int(data.get("EXPORT_ROW_LIMIT", 10000))
    EXPORT_TIMEZONE = data.get("EXPORT_TIMEZONE", "UTC")

    @classmethod
    def get_webhook_secret(cls, app_name: str) -> Optional[str]:
        """
        Resolve the signing secret for one application.

        The process environment wins over env.yaml; both are keyed by
        WEBHOOK_SECRET_<APP_NAME> uppercased.
        """
        key = f"WEBHOOK_SECRET_{app_name}".upper()
        secret = os.environ.get(key)
        if secret:
            return secret
        return cls.WEBHOOK_SECRETS.get(key) or None
