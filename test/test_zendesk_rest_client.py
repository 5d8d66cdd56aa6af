"""
Unit tests for ZendeskRestClient
Covers auth schemes, status handling and the retry / rate limit loop
"""
import pytest
import requests
from unittest.mock import Mock, patch

from zendesk_input.connector.errors import (
    ConfigError,
    RateLimitError,
    TemporaryFailureError,
    ZendeskRequestError,
)
from zendesk_input.connector.zendesk_rest_client import ZendeskRestClient

URL = 'https://acme.zendesk.com/api/v2/incremental/tickets.json?start_time=0'


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return ZendeskRestClient(session=session)


@pytest.fixture
def mock_sleep():
    with patch('zendesk_input.connector.zendesk_rest_client.time.sleep') as sleep:
        yield sleep


class TestAuth:
    """Test suite for how each auth method reaches the request"""

    def test_basic_auth(self, client, session, make_task, make_response):
        """Test basic auth sends username and password"""
        session.request.return_value = make_response(200, '{"tickets": []}')

        body = client.do_get(URL, make_task())

        assert body == '{"tickets": []}'
        kwargs = session.request.call_args.kwargs
        assert session.request.call_args.args == ('GET', URL)
        assert kwargs['auth'] == ('agent@acme.com', 'secret')
        assert kwargs['timeout'] == 30
        assert 'Authorization' not in kwargs['headers']

    def test_token_auth(self, client, session, make_task, make_response):
        """Test token auth appends /token to the username"""
        session.request.return_value = make_response(200)

        client.do_get(URL, make_task(auth_method='token', password=None, token='abc'))

        assert session.request.call_args.kwargs['auth'] == ('agent@acme.com/token', 'abc')

    def test_oauth(self, client, session, make_task, make_response):
        """Test oauth sends a bearer token instead of basic auth"""
        session.request.return_value = make_response(200)

        client.do_get(URL, make_task(auth_method='oauth', access_token='xyz'))

        kwargs = session.request.call_args.kwargs
        assert kwargs['auth'] is None
        assert kwargs['headers']['Authorization'] == 'Bearer xyz'

    def test_request_timeout_from_task(self, client, session, make_task, make_response):
        """Test the task timeout is passed to requests"""
        session.request.return_value = make_response(200)

        client.do_get(URL, make_task(request_timeout=5))

        assert session.request.call_args.kwargs['timeout'] == 5

    def test_default_session_created(self):
        """Test a requests session is created when none is given"""
        assert isinstance(ZendeskRestClient().session, requests.Session)


class TestStatusHandling:
    """Test suite for non-retryable statuses"""

    @pytest.mark.parametrize('status_code', [400, 401, 403])
    def test_config_errors_not_retried(self, client, session, make_task, make_response, mock_sleep, status_code):
        """Test rejected requests raise ConfigError straight away"""
        session.request.return_value = make_response(status_code, '{"error": "Couldn\'t authenticate you"}')

        with pytest.raises(ConfigError, match=rf'\[{status_code}\]'):
            client.do_get(URL, make_task())

        assert session.request.call_count == 1
        mock_sleep.assert_not_called()

    def test_not_found(self, client, session, make_task, make_response, mock_sleep):
        """Test 404 raises ZendeskRequestError with the status"""
        session.request.return_value = make_response(404, '{"error": "RecordNotFound"}')

        with pytest.raises(ZendeskRequestError) as exc_info:
            client.do_get(URL, make_task())

        assert exc_info.value.status_code == 404
        assert 'RecordNotFound' in exc_info.value.message
        mock_sleep.assert_not_called()

    def test_check_user_credentials_success(self, client, session, make_task, make_response):
        """Test a successful credential check returns nothing"""
        session.request.return_value = make_response(200, '{"user": {"id": 1}}')

        assert client.check_user_credentials('https://acme.zendesk.com/api/v2/users/me.json', make_task()) is None

    def test_check_user_credentials_rejected(self, client, session, make_task, make_response):
        """Test rejected credentials raise ConfigError"""
        session.request.return_value = make_response(401, 'Unauthorized')

        with pytest.raises(ConfigError):
            client.check_user_credentials('https://acme.zendesk.com/api/v2/users/me.json', make_task())


class TestRetry:
    """Test suite for rate limits and transient failures"""

    def test_rate_limit_waits_retry_after(self, client, session, make_task, make_response, mock_sleep):
        """Test 429 sleeps for Retry-After and then succeeds"""
        session.request.side_effect = [
            make_response(429, 'Too Many Requests', {'Retry-After': '7'}),
            make_response(200, '{"users": []}'),
        ]

        body = client.do_get(URL, make_task())

        assert body == '{"users": []}'
        mock_sleep.assert_called_once_with(7)

    def test_rate_limit_uses_reset_header(self, client, session, make_task, make_response):
        """Test X-Rate-Limit-Reset is used when Retry-After is missing"""
        session.request.side_effect = [
            make_response(429, headers={'X-Rate-Limit-Reset': '1030'}),
            make_response(200),
        ]

        with patch('zendesk_input.connector.zendesk_rest_client.time') as mock_time:
            mock_time.time.return_value = 1000
            client.do_get(URL, make_task())

        mock_time.sleep.assert_called_once_with(30)

    def test_rate_limit_default_delay(self, client, make_response):
        """Test the default delay without rate limit headers"""
        assert client.get_retry_delay(make_response(429)) == 60

    def test_rate_limit_ignores_malformed_headers(self, client, make_response):
        """Test non-numeric rate limit headers fall back to the default delay"""
        response = make_response(429, headers={'Retry-After': 'soon', 'X-Rate-Limit-Reset': 'later'})
        assert client.get_retry_delay(response) == 60

    def test_rate_limit_exhausted(self, client, session, make_task, make_response, mock_sleep):
        """Test RateLimitError once retries are used up"""
        session.request.return_value = make_response(429, headers={'Retry-After': '1'})

        with pytest.raises(RateLimitError):
            client.do_get(URL, make_task(retry_limit=2))

        assert session.request.call_count == 3
        assert mock_sleep.call_count == 2

    def test_server_error_backs_off_exponentially(self, client, session, make_task, make_response, mock_sleep):
        """Test 503 without Retry-After doubles the wait each time"""
        session.request.side_effect = [
            make_response(503),
            make_response(503),
            make_response(500),
            make_response(200, '{"organizations": []}'),
        ]

        body = client.do_get(URL, make_task(retry_initial_wait_sec=2))

        assert body == '{"organizations": []}'
        assert [c.args[0] for c in mock_sleep.call_args_list] == [2, 4, 8]

    def test_server_error_honours_retry_after(self, client, session, make_task, make_response, mock_sleep):
        """Test 503 with Retry-After waits that long"""
        session.request.side_effect = [
            make_response(503, headers={'Retry-After': '15'}),
            make_response(200),
        ]

        client.do_get(URL, make_task())

        mock_sleep.assert_called_once_with(15)

    def test_server_error_malformed_retry_after_backs_off(self, client, session, make_task, make_response,
                                                           mock_sleep):
        """Test 503 with a non-numeric Retry-After uses the backoff delay"""
        session.request.side_effect = [
            make_response(503, headers={'Retry-After': 'Wed, 21 Oct 2026 07:28:00 GMT'}),
            make_response(200),
        ]

        client.do_get(URL, make_task(retry_initial_wait_sec=3))

        mock_sleep.assert_called_once_with(3)

    def test_conflict_is_temporary(self, client, session, make_task, make_response, mock_sleep):
        """Test 409 raises TemporaryFailureError after retries"""
        session.request.return_value = make_response(409)

        with pytest.raises(TemporaryFailureError) as exc_info:
            client.do_get(URL, make_task(retry_limit=1))

        assert exc_info.value.status_code == 409
        assert session.request.call_count == 2

    def test_no_retries_when_limit_is_zero(self, client, session, make_task, make_response, mock_sleep):
        """Test retry_limit=0 fails on the first transient error"""
        session.request.return_value = make_response(502)

        with pytest.raises(TemporaryFailureError):
            client.do_get(URL, make_task(retry_limit=0))

        assert session.request.call_count == 1
        mock_sleep.assert_not_called()

    def test_connection_error_retried(self, client, session, make_task, make_response, mock_sleep):
        """Test connection errors are retried with backoff"""
        session.request.side_effect = [
            requests.exceptions.ConnectionError('connection reset'),
            make_response(200, '{"tickets": []}'),
        ]

        assert client.do_get(URL, make_task()) == '{"tickets": []}'
        mock_sleep.assert_called_once_with(1)

    def test_timeout_propagates_after_retries(self, client, session, make_task, mock_sleep):
        """Test the last transport error is raised unchanged"""
        session.request.side_effect = requests.exceptions.Timeout('read timed out')

        with pytest.raises(requests.exceptions.Timeout):
            client.do_get(URL, make_task(retry_limit=2))

        assert session.request.call_count == 3
