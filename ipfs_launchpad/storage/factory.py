from .kubo import KuboNodeClient
from .memory import InMemoryNodeClient


def get_node_client(config):
    backend = config.backend.lower()

    if backend == "kubo" or backend == "ipfs":
        return KuboNodeClient(api_addr=config.api_addr, timeout=config.timeout)
    elif backend == "memory":
        return InMemoryNodeClient()
    else:
        raise ValueError(f"Unknown storage backend: {backend}")
