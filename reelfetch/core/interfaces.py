from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class NetworkAdapter(ABC):
    @abstractmethod
    def get_json(self, url: str, params: Optional[Dict[str, str]] = None, headers: Optional[Dict[str, str]] = None, timeout: float = 20.0) -> Any:
        """GETs the URL and returns the decoded JSON body. Raises on non-2xx or bad JSON."""
        pass

    @abstractmethod
    def get_text(self, url: str, params: Optional[Dict[str, str]] = None, headers: Optional[Dict[str, str]] = None, timeout: float = 20.0) -> str:
        """GETs the URL and returns the body as text. Raises on non-2xx."""
        pass
