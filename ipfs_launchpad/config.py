import math
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DOWNLOAD_PATH = "~/Downloads"

# The record stays valid for 50 hours. Resolvers may cache it for only 1
# microsecond, so a resolve right after a publish sees the new value; the
# cost is that every resolve goes back to the network.
DEFAULT_LIFETIME = timedelta(hours=50)
DEFAULT_CACHE_TTL = timedelta(microseconds=1)


@dataclass(frozen=True)
class LaunchpadConfig:
    api_addr: str = "localhost:5001"
    download_path: str = DEFAULT_DOWNLOAD_PATH
    public_key: str = ""
    record_lifetime: timedelta = DEFAULT_LIFETIME
    record_cache_ttl: timedelta = DEFAULT_CACHE_TTL
    check_existing: bool = True
    backend: str = "kubo"
    timeout: float = 60.0


def load_env_file() -> None:
    # Look for .env next to the package or in the working directory
    env_path = Path(__file__).parent.parent / ".env"
    if not env_path.exists():
        env_path = Path.cwd() / ".env"
    load_dotenv(env_path)


def _number(name: str, default: str, kind=float):
    raw = os.getenv(name, default)
    try:
        value = kind(raw)
    except ValueError:
        value = None
    if value is None or not math.isfinite(value):
        raise ValueError(
            f"{name} must be a number (got {raw!r}). Please fix it in .env file."
        )
    return value


def _duration(name: str, default: str, unit: str, kind=float) -> timedelta:
    value = _number(name, default, kind)
    try:
        return timedelta(**{unit: value})
    except OverflowError:
        raise ValueError(
            f"{name} is out of range (got {value!r}). Please fix it in .env file."
        ) from None


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(
        f"{name} must be true or false (got {raw!r}). Please fix it in .env file."
    )


def load_config() -> LaunchpadConfig:
    """Build the run configuration from the environment (and .env, if any)."""
    load_env_file()

    return LaunchpadConfig(
        api_addr=os.getenv("IPFS_API_ADDR", "localhost:5001"),
        download_path=os.getenv("IPFS_DOWNLOAD_PATH", DEFAULT_DOWNLOAD_PATH),
        public_key=os.getenv("IPNS_PUBLIC_KEY", ""),
        record_lifetime=_duration("IPNS_LIFETIME_HOURS", "50", "hours"),
        record_cache_ttl=_duration(
            "IPNS_CACHE_TTL_US", "1", "microseconds", kind=int
        ),
        check_existing=_flag("IPNS_CHECK_EXISTING", True),
        backend=os.getenv("STORAGE_BACKEND", "kubo"),
        timeout=_number("IPFS_TIMEOUT", "60"),
    )


def perform_checks(config: LaunchpadConfig) -> None:
    """Reject configurations the walkthrough cannot run with."""
    if not config.download_path.strip():
        raise ValueError(
            "IPFS_DOWNLOAD_PATH is empty. Please set it in .env file."
        )
    if config.record_lifetime <= timedelta(0):
        raise ValueError(
            f"IPNS record lifetime must be positive (got {config.record_lifetime})."
        )
    if config.record_cache_ttl < timedelta(0):
        raise ValueError(
            f"IPNS cache TTL cannot be negative (got {config.record_cache_ttl})."
        )
    if not math.isfinite(config.timeout) or config.timeout <= 0:
        raise ValueError(f"IPFS_TIMEOUT must be positive (got {config.timeout}).")
    if not config.public_key:
        print("[config] IPNS_PUBLIC_KEY not set, publishing under the node's own key")
