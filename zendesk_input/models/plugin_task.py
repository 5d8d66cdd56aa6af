"""
plugin_task.py
==============

Immutable task configuration shared by the URL builder, the REST client
and the service. Built from a plain mapping (API request bodies, tests)
or from the process environment.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from zendesk_input.connector.errors import ConfigError
from zendesk_input.models.target import Target
from zendesk_input.utils.config import CONFIG
from zendesk_input.utils.helpers import iso_to_epoch_second, split_list

AUTH_METHODS = ('basic', 'token', 'oauth')


@dataclass(frozen=True)
class PluginTask:
    """Configuration for one Zendesk input task"""
    login_url: str
    target: Target
    auth_method: str = 'basic'
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    access_token: Optional[str] = None
    start_time: Optional[str] = None
    includes: Tuple[str, ...] = ()
    retry_limit: int = 5
    retry_initial_wait_sec: int = 1
    request_timeout: int = 30

    def __post_init__(self):
        if not self.login_url:
            raise ConfigError("login_url is required")
        # Frozen dataclass, so normalisation goes through object.__setattr__
        object.__setattr__(self, 'login_url', self.login_url.rstrip('/'))
        object.__setattr__(self, 'target', Target.from_value(self.target))
        object.__setattr__(self, 'auth_method', (self.auth_method or 'basic').strip().lower())
        object.__setattr__(self, 'includes', tuple(split_list(self.includes)))
        object.__setattr__(self, 'start_time', self.start_time or None)

        self._validate_credentials()
        self._validate_start_time()

        if self.retry_limit < 0:
            raise ConfigError("retry_limit must not be negative")

    def _validate_credentials(self):
        if self.auth_method == 'basic':
            valid = self.username and self.password
        elif self.auth_method == 'token':
            valid = self.username and self.token
        elif self.auth_method == 'oauth':
            valid = self.access_token
        else:
            raise ConfigError(
                f"Unknown auth_method ({self.auth_method}). Should pick one from 'basic', 'token' or 'oauth'."
            )

        if not valid:
            raise ConfigError(f"Missing required credentials for {self.auth_method}")

    def _validate_start_time(self):
        if self.start_time is None:
            return
        try:
            iso_to_epoch_second(self.start_time)
        except ValueError:
            raise ConfigError(f"start_time '{self.start_time}' is not a valid ISO-8601 timestamp")

    def start_time_epoch(self) -> Optional[int]:
        return iso_to_epoch_second(self.start_time) if self.start_time else None

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'PluginTask':
        """Build a task from a mapping, ignoring keys that are not task fields"""
        known = {name for name in cls.__dataclass_fields__}
        values = {key: value for key, value in config.items() if key in known and value is not None}
        if 'login_url' not in values:
            raise ConfigError("login_url is required")
        if 'target' not in values:
            raise ConfigError("target is required")
        return cls(**values)

    @classmethod
    def from_env(cls, **overrides) -> 'PluginTask':
        config = env_task_config()
        config.update({key: value for key, value in overrides.items() if value is not None})
        return cls.from_config(config)


def env_task_config() -> Dict[str, Any]:
    """Task settings read from CONFIG; empty strings count as unset"""
    config = {
        'login_url': CONFIG['ZENDESK_LOGIN_URL'],
        'target': CONFIG['ZENDESK_TARGET'],
        'auth_method': CONFIG['ZENDESK_AUTH_METHOD'],
        'username': CONFIG['ZENDESK_USERNAME'],
        'password': CONFIG['ZENDESK_PASSWORD'],
        'token': CONFIG['ZENDESK_TOKEN'],
        'access_token': CONFIG['ZENDESK_ACCESS_TOKEN'],
        'start_time': CONFIG['ZENDESK_START_TIME'],
        'includes': CONFIG['ZENDESK_INCLUDES'],
        'retry_limit': CONFIG['ZENDESK_RETRY_LIMIT'],
        'retry_initial_wait_sec': CONFIG['ZENDESK_RETRY_INITIAL_WAIT_SEC'],
        'request_timeout': CONFIG['ZENDESK_REQUEST_TIMEOUT'],
    }
    return {key: value for key, value in config.items() if value != ''}
