import os

from dotenv import load_dotenv

load_dotenv()

CONFIG = {
    'EXEC_ENVIRONMENT': os.environ.get('EXEC_ENVIRONMENT', 'local'),
    'LOG_DIR': os.environ.get('LOG_DIR', 'logs'),
    'LOG_LEVEL': os.environ.get('LOG_LEVEL', 'DEBUG').upper(),
    'ZENDESK_LOGIN_URL': os.environ.get('ZENDESK_LOGIN_URL', ''),
    'ZENDESK_AUTH_METHOD': os.environ.get('ZENDESK_AUTH_METHOD', 'basic'),
    'ZENDESK_USERNAME': os.environ.get('ZENDESK_USERNAME', ''),
    'ZENDESK_PASSWORD': os.environ.get('ZENDESK_PASSWORD', ''),
    'ZENDESK_TOKEN': os.environ.get('ZENDESK_TOKEN', ''),
    'ZENDESK_ACCESS_TOKEN': os.environ.get('ZENDESK_ACCESS_TOKEN', ''),
    'ZENDESK_TARGET': os.environ.get('ZENDESK_TARGET', 'tickets'),
    'ZENDESK_START_TIME': os.environ.get('ZENDESK_START_TIME', ''),
    'ZENDESK_INCLUDES': os.environ.get('ZENDESK_INCLUDES', ''),
    'ZENDESK_RETRY_LIMIT': int(os.environ.get('ZENDESK_RETRY_LIMIT', 5)),
    'ZENDESK_RETRY_INITIAL_WAIT_SEC': int(os.environ.get('ZENDESK_RETRY_INITIAL_WAIT_SEC', 1)),
    'ZENDESK_REQUEST_TIMEOUT': int(os.environ.get('ZENDESK_REQUEST_TIMEOUT', 30)),
}
