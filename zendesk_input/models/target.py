from enum import Enum

from zendesk_input.connector.errors import ConfigError


class Target(Enum):
    """Zendesk Support resources the connector can read.

    Each member carries the API name plus two capability flags:
    whether Zendesk exposes an incremental export for it and whether
    related records can be side-loaded with ``include=``.
    """

    TICKETS = ('tickets', True, True)
    USERS = ('users', True, True)
    ORGANIZATIONS = ('organizations', True, True)
    TICKET_EVENTS = ('ticket_events', True, False)
    # Fetched as tickets with metric_sets side-loaded
    TICKET_METRICS = ('ticket_metrics', True, True)
    TICKET_FIELDS = ('ticket_fields', False, False)
    TICKET_FORMS = ('ticket_forms', False, False)

    def __init__(self, api_name, supports_incremental, supports_include):
        self.api_name = api_name
        self.supports_incremental = supports_incremental
        self.supports_include = supports_include

    def __str__(self):
        return self.api_name

    @classmethod
    def from_value(cls, value):
        if isinstance(value, cls):
            return value

        name = str(value or '').strip().lower()
        for target in cls:
            if target.api_name == name:
                return target

        supported = ', '.join(target.api_name for target in cls)
        raise ConfigError(f"target: '{value}' is not supported. Supported targets are {supported}.")
