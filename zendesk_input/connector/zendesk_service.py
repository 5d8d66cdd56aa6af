from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ZendeskService(ABC):
    """Interface for services that fetch pages from a Zendesk API"""

    @abstractmethod
    def get_data(self, path: str = '', page: int = 1, is_preview: bool = False,
                 start_time: Optional[int] = None) -> Dict[str, Any]:
        """
        Fetch one page and return the parsed response document

        Args:
            path: full URL to fetch; built from the task when empty
            page: 1-based page number for listing targets
            is_preview: fetch the small sample page used for previews
            start_time: epoch seconds for incremental targets

        Returns:
            Response JSON object
        """
        pass

    @abstractmethod
    def validate_credential(self, path: Optional[str] = None) -> None:
        """Raise if the configured credentials are rejected"""
        pass
