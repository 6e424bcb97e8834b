"""Infrastructure layer exports."""

from .audit import CallAuditLog
from .objects import ObjectStoreClient
from .remote import RemoteSession
from .transforms import COMBINE_EVENTS, TransformClient

__all__ = [
    "COMBINE_EVENTS",
    "CallAuditLog",
    "ObjectStoreClient",
    "RemoteSession",
    "TransformClient",
]
