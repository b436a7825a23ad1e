import io
import os
import shutil
import tarfile
from datetime import timedelta
from pathlib import Path, PurePosixPath

import requests

from .base import NodeClient, PublishedName
from .errors import (
    AuthorizationError,
    FilesystemError,
    NotFoundError,
    TransportError,
)

DEFAULT_API_ADDR = "localhost:5001"
DEFAULT_TIMEOUT = 60.0

# Substrings of node error messages that mean "nothing there"
NOT_FOUND_HINTS = (
    "not found",
    "could not resolve",
    "no link named",
    "failed to find",
)


def format_go_duration(value: timedelta) -> str:
    """Render a timedelta the way the node's duration parser expects it."""
    micros = value // timedelta(microseconds=1)
    if micros % 1_000_000 == 0:
        return f"{micros // 1_000_000}s"
    return f"{micros}us"


def strip_ipfs_prefix(path: str) -> str:
    if path.startswith("/ipfs/"):
        return path[len("/ipfs/"):]
    return path


class KuboNodeClient(NodeClient):
    """Node client speaking the Kubo RPC API (``/api/v0``) over HTTP."""

    def __init__(
        self,
        api_addr: str = DEFAULT_API_ADDR,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        if "://" not in api_addr:
            api_addr = f"http://{api_addr}"
        self.base_url = f"{api_addr.rstrip('/')}/api/v0"
        self.timeout = timeout
        self.session = session or requests.Session()

    def __enter__(self) -> "KuboNodeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _rpc(self, command: str, params=None, files=None) -> requests.Response:
        # The RPC API only accepts POST
        url = f"{self.base_url}/{command}"
        try:
            resp = self.session.post(
                url, params=params, files=files, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(
                f"could not reach IPFS node at {self.base_url}: {e}"
            ) from e

        if resp.status_code != 200:
            raise self._node_error(command, resp)
        return resp

    def _node_error(self, command: str, resp: requests.Response) -> Exception:
        try:
            message = resp.json()["Message"]
        except (ValueError, KeyError, TypeError):
            message = None
        if not isinstance(message, str) or not message:
            message = resp.text.strip() or f"HTTP {resp.status_code}"

        lowered = message.lower()
        if command == "name/publish" and "key" in lowered:
            return AuthorizationError(message)
        if any(hint in lowered for hint in NOT_FOUND_HINTS):
            return NotFoundError(message)
        return TransportError(f"{command} failed with HTTP {resp.status_code}: {message}")

    def _json(self, command: str, resp: requests.Response, field: str) -> str:
        try:
            return resp.json()[field]
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(
                f"{command}: malformed response from node: {resp.text[:200]!r}"
            ) from e

    def add_content(self, text: str) -> str:
        resp = self._rpc("add", files={"file": ("file", text.encode("utf-8"))})
        return self._json("add", resp, "Hash")

    def read_content(self, cid: str) -> str:
        resp = self._rpc("cat", params={"arg": f"/ipfs/{cid}"})
        try:
            return resp.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransportError(f"cat: content of {cid} is not UTF-8 text") from e

    def download_content(self, cid: str, local_path: str) -> None:
        resp = self._rpc("get", params={"arg": cid})
        dest = Path(os.path.expanduser(local_path))

        try:
            with tarfile.open(fileobj=io.BytesIO(resp.content)) as archive:
                members = archive.getmembers()
                for member in members:
                    name = PurePosixPath(member.name)
                    if name.is_absolute() or ".." in name.parts:
                        raise TransportError(
                            f"get: refusing archive entry outside destination: {member.name}"
                        )

                if len(members) == 1 and members[0].isfile():
                    target = dest / members[0].name if dest.is_dir() else dest
                    target.parent.mkdir(parents=True, exist_ok=True)
                    with archive.extractfile(members[0]) as src, open(target, "wb") as out:
                        shutil.copyfileobj(src, out)
                else:
                    target = dest
                    dest.mkdir(parents=True, exist_ok=True)
                    archive.extractall(dest, members=members, filter="data")
        except tarfile.TarError as e:
            raise TransportError(f"get: malformed archive for {cid}: {e}") from e
        except OSError as e:
            raise FilesystemError(f"could not write {cid} to {dest}: {e}") from e

        print(f"[kubo] Saved {cid} to {target}")

    def publish_name(
        self,
        cid: str,
        public_key: str,
        lifetime: timedelta,
        cache_ttl: timedelta,
        check_existing: bool,
    ) -> PublishedName:
        params = {
            "arg": cid,
            "lifetime": format_go_duration(lifetime),
            "resolve": "true" if check_existing else "false",
        }
        # Empty key publishes under the node's own identity
        if public_key:
            params["key"] = public_key
        if cache_ttl > timedelta(0):
            params["ttl"] = format_go_duration(cache_ttl)

        resp = self._rpc("name/publish", params=params)
        return PublishedName(
            name=self._json("name/publish", resp, "Name"),
            value=self._json("name/publish", resp, "Value"),
        )

    def resolve_name(self, public_key: str) -> str:
        params = {"arg": public_key} if public_key else None
        resp = self._rpc("name/resolve", params=params)
        return strip_ipfs_prefix(self._json("name/resolve", resp, "Path"))
