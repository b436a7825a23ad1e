import sys

from .config import load_config
from .storage import get_node_client
from .walkthrough import run_walkthrough


def main() -> int:
    try:
        config = load_config()
        client = get_node_client(config)
    except ValueError as e:
        print(f"Error in configuration: {e}")
        return 1

    try:
        result = run_walkthrough(client, config)
    finally:
        client.close()
    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(main())
