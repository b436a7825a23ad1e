from .base import NodeClient, PublishedName
from .errors import (
    AuthorizationError,
    FilesystemError,
    NodeError,
    NotFoundError,
    TransportError,
)
from .factory import get_node_client

__all__ = [
    "AuthorizationError",
    "FilesystemError",
    "NodeClient",
    "NodeError",
    "NotFoundError",
    "PublishedName",
    "TransportError",
    "get_node_client",
]
