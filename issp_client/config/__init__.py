"""Configuration module for the ISSP client."""

from issp_client.config.settings import ClientSettings, DEFAULT_SETTINGS
from issp_client.config import endpoints

__all__ = [
    "ClientSettings",
    "DEFAULT_SETTINGS",
    "endpoints",
]
