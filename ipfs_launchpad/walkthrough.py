from dataclasses import dataclass

from .config import LaunchpadConfig, perform_checks
from .storage import NodeClient, NodeError

DEFAULT_TEXT = "Hello from Launchpad!"


@dataclass
class WalkthroughResult:
    cid: str
    text: str
    download_path: str
    resolved: str


def separator() -> None:
    print("-" * 40)


def run_walkthrough(
    client: NodeClient,
    config: LaunchpadConfig,
    text: str = DEFAULT_TEXT,
) -> WalkthroughResult | None:
    """Add, read, download, publish and resolve one piece of content.

    Stops at the first failing step, after printing what went wrong, and
    returns None. On success every step has run exactly once.
    """

    # --- 0) Validate configuration before touching the node ---
    try:
        perform_checks(config)
    except ValueError as e:
        print(f"Error in configuration: {e}")
        return None

    # --- 1) Add the text ---
    print("Adding file to IPFS")
    try:
        cid = client.add_content(text)
    except NodeError as e:
        print(f"Error adding file to IPFS: {e}")
        return None
    print(f"File added with CID: {cid}")

    separator()

    # --- 2) Read it back through its CID ---
    print("Reading file")
    try:
        content = client.read_content(cid)
    except NodeError as e:
        print(f"Error reading the file: {e}")
        return None
    print(f"Content of the file: {content}")

    separator()

    # --- 3) Download it to the local path ---
    print("Downloading file")
    try:
        client.download_content(cid, config.download_path)
    except NodeError as e:
        print(f"Error downloading file: {e}")
        return None
    print("File downloaded")

    separator()

    # --- 4) Point the naming record at the CID ---
    print("Adding file to IPNS")
    try:
        client.publish_name(
            cid,
            config.public_key,
            config.record_lifetime,
            config.record_cache_ttl,
            config.check_existing,
        )
    except NodeError as e:
        print(f"Error publishing to IPNS: {e}")
        return None
    print("File added to IPNS")

    separator()

    # --- 5) Resolve the naming record ---
    print("Resolving file in IPNS")
    try:
        resolved = client.resolve_name(config.public_key)
    except NodeError as e:
        print(f"Error resolving IPNS: {e}")
        return None
    print(f"IPNS is pointing to: {resolved}")

    return WalkthroughResult(
        cid=cid,
        text=content,
        download_path=config.download_path,
        resolved=resolved,
    )
