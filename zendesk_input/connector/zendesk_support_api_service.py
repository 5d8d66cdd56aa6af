"""
zendesk_support_api_service.py
==============================

Zendesk Support API service: builds the URL for a page, fetches it
through ZendeskRestClient and parses the body into a JSON object.
Errors from the client and the parser reach the caller unchanged.
"""

import logging
from typing import Any, Dict, Optional

from zendesk_input.connector.errors import ConfigError
from zendesk_input.connector.response_parser import parse_json_object
from zendesk_input.connector.url_builder import api_prefix, build_credential_check_path, build_path
from zendesk_input.connector.zendesk_rest_client import ZendeskRestClient
from zendesk_input.connector.zendesk_service import ZendeskService
from zendesk_input.models.plugin_task import PluginTask

logger = logging.getLogger(__name__)


class ZendeskSupportAPIService(ZendeskService):
    """Zendesk Support implementation of ZendeskService"""

    def __init__(self, task: PluginTask):
        self.task = task
        self._zendesk_rest_client = None

    def get_data(self, path: str = '', page: int = 1, is_preview: bool = False,
                 start_time: Optional[int] = None) -> Dict[str, Any]:
        if path:
            self._check_path(path)
        else:
            path = build_path(self.task, page, is_preview, start_time)

        logger.info(f'Fetching {"preview" if is_preview else "page"} for {self.task.target}',
                    extra={'target': str(self.task.target), 'page': page, 'url': path})

        response = self.get_zendesk_rest_client().do_get(path, self.task)
        return parse_json_object(response)

    def validate_credential(self, path: Optional[str] = None) -> None:
        if path:
            self._check_path(path)
        else:
            path = build_credential_check_path(self.task)
        self.get_zendesk_rest_client().check_user_credentials(path, self.task)

    def get_zendesk_rest_client(self) -> ZendeskRestClient:
        if self._zendesk_rest_client is None:
            self._zendesk_rest_client = ZendeskRestClient()
        return self._zendesk_rest_client

    def _check_path(self, path: str) -> None:
        """Credentials are only ever sent to the task's own Support API"""
        if not path.startswith(api_prefix(self.task)):
            raise ConfigError(f"path '{path}' is outside {api_prefix(self.task)}")
