from typing import List, Optional, Union

import requests

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from zendesk_input.connector.errors import ConfigError, ZendeskError
from zendesk_input.connector.zendesk_support_api_service import ZendeskSupportAPIService
from zendesk_input.models.plugin_task import PluginTask
from zendesk_input.utils.logger import setup_logger

app = FastAPI()
logger = setup_logger()

# Parse failures surface as ValueError, exhausted transport retries as RequestException
UPSTREAM_ERRORS = (ZendeskError, ValueError, requests.exceptions.RequestException)


class TaskRequest(BaseModel):
    login_url: Optional[str] = None
    target: Optional[str] = None
    auth_method: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    access_token: Optional[str] = None
    start_time: Optional[str] = None
    includes: Optional[Union[List[str], str]] = None
    retry_limit: Optional[int] = None
    retry_initial_wait_sec: Optional[int] = None
    request_timeout: Optional[int] = None


class DataRequest(TaskRequest):
    page: int = 1
    start_time_epoch: Optional[int] = None
    path: Optional[str] = None


def build_service(request: TaskRequest) -> ZendeskSupportAPIService:
    overrides = request.model_dump(include=set(TaskRequest.model_fields), exclude_none=True)
    try:
        task = PluginTask.from_env(**overrides)
    except ConfigError as ex:
        raise HTTPException(status_code=400, detail=ex.message)
    return ZendeskSupportAPIService(task)


def to_http_exception(ex: Exception, target) -> HTTPException:
    """ConfigError maps to 400, every other upstream failure to 502"""
    message = getattr(ex, 'message', None) or str(ex)
    if isinstance(ex, ConfigError):
        logger.warning(f'Rejected configuration for {target}: {message}', extra={'target': str(target)})
        return HTTPException(status_code=400, detail=message)

    logger.error(f'Zendesk request for {target} failed: {message}', extra={
        'target': str(target),
        'status_code': getattr(ex, 'status_code', None)
    })
    return HTTPException(status_code=502, detail=message)


@app.post('/validate')
def validate_credentials(request: TaskRequest):
    service = build_service(request)
    try:
        service.validate_credential()
    except UPSTREAM_ERRORS as ex:
        raise to_http_exception(ex, service.task.target)

    return {'valid': True}


@app.post('/preview')
def preview(request: TaskRequest):
    service = build_service(request)
    try:
        return service.get_data(is_preview=True)
    except UPSTREAM_ERRORS as ex:
        raise to_http_exception(ex, service.task.target)


@app.post('/data')
def fetch_page(request: DataRequest):
    if request.page < 1:
        raise HTTPException(status_code=400, detail='page must be 1 or greater')

    service = build_service(request)
    try:
        return service.get_data(
            path=request.path or '',
            page=request.page,
            start_time=request.start_time_epoch
        )
    except UPSTREAM_ERRORS as ex:
        raise to_http_exception(ex, service.task.target)
