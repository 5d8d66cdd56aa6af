import pytest
from unittest.mock import Mock

import requests

from zendesk_input.models.plugin_task import PluginTask

LOGIN_URL = 'https://acme.zendesk.com'


@pytest.fixture
def make_task():
    def _make_task(**overrides):
        values = {
            'login_url': LOGIN_URL,
            'target': 'tickets',
            'username': 'agent@acme.com',
            'password': 'secret',
        }
        values.update(overrides)
        return PluginTask.from_config(values)
    return _make_task


@pytest.fixture
def make_response():
    def _make_response(status_code=200, text='{}', headers=None):
        mock_resp = Mock(spec=requests.Response)
        mock_resp.status_code = status_code
        mock_resp.text = text
        mock_resp.headers = headers or {}
        return mock_resp
    return _make_response
