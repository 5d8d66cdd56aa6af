"""
zendesk_rest_client.py
======================

HTTP transport for the Zendesk Support API.

Applies the task's auth scheme, waits out rate limits, retries transient
failures with exponential backoff and turns the remaining error statuses
into connector exceptions.
"""

import logging
import time
from typing import Dict, Optional, Tuple

import requests

from zendesk_input.connector.errors import (
    ConfigError,
    RateLimitError,
    TemporaryFailureError,
    ZendeskRequestError,
)
from zendesk_input.models.plugin_task import PluginTask

logger = logging.getLogger(__name__)

CONFIG_ERROR_STATUSES = (400, 401, 403)
RETRYABLE_STATUSES = (409, 500, 502, 503, 504)
DEFAULT_RATE_LIMIT_DELAY = 60


class ZendeskRestClient:
    """Zendesk REST client with retry and rate limit handling"""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def do_get(self, url: str, task: PluginTask) -> str:
        """GET ``url`` and return the response body"""
        response = self._send_get_request(url, task)
        return response.text

    def check_user_credentials(self, url: str, task: PluginTask) -> None:
        """GET ``url`` only to find out whether Zendesk accepts the credentials"""
        self._send_get_request(url, task)
        logger.info('Zendesk accepted the configured credentials', extra={'url': url})

    def _send_get_request(self, url: str, task: PluginTask) -> requests.Response:
        auth, headers = self._build_auth(task)
        retries = 0

        while True:
            logger.debug(f'Fetching {url}', extra={'url': url, 'target': str(task.target)})
            try:
                response = self.session.request(
                    'GET',
                    url,
                    auth=auth,
                    headers=headers,
                    timeout=task.request_timeout,
                )
            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                if retries >= task.retry_limit:
                    raise
                retries += 1
                delay = self.get_backoff_delay(task, retries)
                logger.warning(f'Request failed: {e}. Retrying in {delay}s (attempt {retries})', extra={'url': url})
                time.sleep(delay)
                continue

            status_code = response.status_code

            if 200 <= status_code < 300:
                return response

            if status_code in CONFIG_ERROR_STATUSES:
                raise ConfigError(f'[{status_code}] {response.text}')

            if self.is_rate_limited(response):
                if retries >= task.retry_limit:
                    raise RateLimitError(f'Rate limit exceeded after {retries} retries')
                retries += 1
                delay = self.get_retry_delay(response)
                logger.warning(f'Rate Limited. Waiting {delay} seconds to retry (attempt {retries})',
                               extra={'url': url, 'status_code': status_code})
                time.sleep(delay)
                continue

            if status_code in RETRYABLE_STATUSES:
                if retries >= task.retry_limit:
                    raise TemporaryFailureError(f'[{status_code}] temporary failure.', status_code)
                retries += 1
                delay = self._retry_after(response)
                if delay is None:
                    delay = self.get_backoff_delay(task, retries)
                logger.warning(f'[{status_code}] temporary failure. Retrying in {delay}s (attempt {retries})',
                               extra={'url': url, 'status_code': status_code})
                time.sleep(delay)
                continue

            raise ZendeskRequestError(f'[{status_code}] {response.text}', status_code)

    def _build_auth(self, task: PluginTask) -> Tuple[Optional[Tuple[str, str]], Dict[str, str]]:
        headers = {'Content-Type': 'application/json', 'Accept': 'application/json'}

        if task.auth_method == 'token':
            return (f'{task.username}/token', task.token), headers
        if task.auth_method == 'oauth':
            headers['Authorization'] = f'Bearer {task.access_token}'
            return None, headers
        return (task.username, task.password), headers

    def is_rate_limited(self, response: requests.Response) -> bool:
        return response.status_code == 429

    def get_retry_delay(self, response: requests.Response) -> int:
        """Seconds to wait after a 429: Retry-After, then X-Rate-Limit-Reset, then a minute"""
        retry_after = self._retry_after(response)
        if retry_after is not None:
            return retry_after

        reset_time = _header_seconds(response, 'X-Rate-Limit-Reset')
        if reset_time is not None:
            return max(0, reset_time - int(time.time()))

        return DEFAULT_RATE_LIMIT_DELAY

    def get_backoff_delay(self, task: PluginTask, retries: int) -> int:
        return task.retry_initial_wait_sec * (2 ** (retries - 1))

    def _retry_after(self, response: requests.Response) -> Optional[int]:
        return _header_seconds(response, 'Retry-After')


def _header_seconds(response: requests.Response, name: str) -> Optional[int]:
    """Integer value of a response header, None when absent or not a number"""
    value = response.headers.get(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None
