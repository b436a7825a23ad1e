from .config import LaunchpadConfig, load_config, perform_checks
from .walkthrough import DEFAULT_TEXT, WalkthroughResult, run_walkthrough

__all__ = [
    "DEFAULT_TEXT",
    "LaunchpadConfig",
    "WalkthroughResult",
    "load_config",
    "perform_checks",
    "run_walkthrough",
]
