from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta


@dataclass
class PublishedName:
    name: str
    value: str


class NodeClient(ABC):
    def close(self) -> None:
        """Release any connection held by the client"""
        pass

    @abstractmethod
    def add_content(self, text: str) -> str:
        """Add text to the node and return its CID"""
        pass

    @abstractmethod
    def read_content(self, cid: str) -> str:
        """Fetch the whole content addressed by cid"""
        pass

    @abstractmethod
    def download_content(self, cid: str, local_path: str) -> None:
        """Fetch the content addressed by cid and write it under local_path"""
        pass

    @abstractmethod
    def publish_name(
        self,
        cid: str,
        public_key: str,
        lifetime: timedelta,
        cache_ttl: timedelta,
        check_existing: bool,
    ) -> PublishedName:
        """Point the naming record owned by public_key at cid"""
        pass

    @abstractmethod
    def resolve_name(self, public_key: str) -> str:
        """Return the CID the naming record owned by public_key points at"""
        pass
