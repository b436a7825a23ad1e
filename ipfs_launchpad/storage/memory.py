import hashlib
import os
from datetime import timedelta
from pathlib import Path

from .base import NodeClient, PublishedName
from .errors import FilesystemError, NotFoundError

SELF_KEY = "self"


class InMemoryNodeClient(NodeClient):
    """Node client that keeps content and naming records in process memory.

    CIDs are synthetic (``bafy`` + a SHA-256 prefix) and only meaningful to
    the same instance.
    """

    def __init__(self) -> None:
        self.blocks: dict[str, bytes] = {}
        self.records: dict[str, str] = {}

    def add_content(self, text: str) -> str:
        data = text.encode("utf-8")
        cid = "bafy" + hashlib.sha256(data).hexdigest()[:40]
        self.blocks[cid] = data
        return cid

    def _block(self, cid: str) -> bytes:
        try:
            return self.blocks[cid]
        except KeyError:
            raise NotFoundError(f"block {cid} not found") from None

    def read_content(self, cid: str) -> str:
        return self._block(cid).decode("utf-8")

    def download_content(self, cid: str, local_path: str) -> None:
        data = self._block(cid)
        dest = Path(os.path.expanduser(local_path))
        target = dest / cid if dest.is_dir() else dest
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise FilesystemError(f"could not write {cid} to {dest}: {e}") from e
        print(f"[memory] Saved {cid} to {target}")

    def publish_name(
        self,
        cid: str,
        public_key: str,
        lifetime: timedelta,
        cache_ttl: timedelta,
        check_existing: bool,
    ) -> PublishedName:
        if check_existing:
            self._block(cid)
        name = public_key or SELF_KEY
        self.records[name] = cid
        return PublishedName(name=name, value=f"/ipfs/{cid}")

    def resolve_name(self, public_key: str) -> str:
        name = public_key or SELF_KEY
        try:
            return self.records[name]
        except KeyError:
            raise NotFoundError(f"could not resolve name {name}") from None
