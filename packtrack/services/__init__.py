"""Services - remote store client and the packing record service."""

from packtrack.services.packing_service import PackingService, get_packing_service
from packtrack.services.store_client import StoreClient, get_store_client

__all__ = [
    "PackingService",
    "StoreClient",
    "get_packing_service",
    "get_store_client",
]
