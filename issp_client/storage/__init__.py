"""Storage modules for the ISSP client."""

from issp_client.storage.session import SessionStore
from issp_client.storage.exporter import GroupExporter

__all__ = [
    "SessionStore",
    "GroupExporter",
]
