import os
import yaml
from outlook.core.domain.settings import SystemSettings

def load_settings(path: str | None = None) -> SystemSettings:
    """
    Load system settings from a YAML file.
    Falls back to environment variables if file doesn't exist or is not provided.

    Args:
        path: Path to config.yaml. Defaults to OUTLOOK_CONFIG_FILE env var or "config.yaml".
    """
    if path is None:
        path = os.getenv("OUTLOOK_CONFIG_FILE", "config.yaml")

    config_data = {}

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except Exception as e:
            raise RuntimeError(f"Failed to load configuration from {path}: {e}")

    # Env vars > File > Defaults
    if os.getenv("DATABASE_URL"):
        config_data["primary_database_url"] = os.getenv("DATABASE_URL")

    if os.getenv("DATABASE_URL_SECONDARY"):
        config_data["secondary_database_url"] = os.getenv("DATABASE_URL_SECONDARY")

    if os.getenv("OUTLOOK_VIEWS_FILE"):
        config_data["views_file"] = os.getenv("OUTLOOK_VIEWS_FILE")

    if os.getenv("LOG_LEVEL"):
        config_data["log_level"] = os.getenv("LOG_LEVEL").upper()

    return SystemSettings(**config_data)
