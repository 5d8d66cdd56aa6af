import logging
import os
import sys
from pythonjsonlogger import json
from zendesk_input.utils.config import CONFIG
from logging.handlers import RotatingFileHandler

LOG_FIELDS = ['target', 'page', 'url', 'status_code', 'context']

class CleanNoneJsonFormatter(json.JsonFormatter):
    def process_log_record(self, log_record):
        return {k: v for k, v in log_record.items() if v is not None}

def build_formatter() -> CleanNoneJsonFormatter:
    extra_fields = ' '.join(f'%({name})s' for name in LOG_FIELDS)
    return CleanNoneJsonFormatter(
        fmt=f'%(asctime)s %(levelname)s %(name)s %(message)s {extra_fields}',
        rename_fields={
            'asctime': 'timestamp',
            'levelname': 'level',
            'message': 'msg'
        }
    )

def setup_logger() -> logging.Logger:
    logger = logging.getLogger()
    # Uvicorn reloads and repeated imports must not stack handlers
    if any(getattr(handler, 'zendesk_input', False) for handler in logger.handlers):
        return logger

    logger.setLevel(CONFIG['LOG_LEVEL'])
    formatter = build_formatter()

    log_dir = CONFIG['LOG_DIR']
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, f'{CONFIG["EXEC_ENVIRONMENT"]}.log')

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes = 10 * 1024 * 1024,
        backupCount = 20
    )
    handlers = [file_handler]

    # INFO and below to stdout, warnings and errors to stderr
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    handlers.append(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    handlers.append(stderr_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.zendesk_input = True
        logger.addHandler(handler)

    # requests/urllib3 debug output repeats every URL we already log
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    return logger
