class NodeError(Exception):
    """Base class for every failure surfaced by a node client."""


class TransportError(NodeError):
    """Node unreachable, request rejected or response malformed."""


class NotFoundError(NodeError):
    """Content or naming record absent."""


class FilesystemError(NodeError):
    """Local write failed while saving downloaded content."""


class AuthorizationError(NodeError):
    """Naming record key mismatch or unknown key."""
