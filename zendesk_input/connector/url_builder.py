"""
url_builder.py
==============

Request URL construction for every supported target.

Listing targets page through ``/api/v2/<target>.json`` sorted by id,
incremental targets read ``/api/v2/incremental/<target>.json`` from a
start time. Preview requests ask for as little data as the endpoint
allows. Ticket metrics are not exported on their own, so they are read
as tickets with ``metric_sets`` side-loaded.
"""

from typing import List, Optional, Tuple
from urllib.parse import quote

from zendesk_input.models.plugin_task import PluginTask
from zendesk_input.models.target import Target

API = '/api/v2'
API_INCREMENTAL = '/api/v2/incremental'

PAGE_SIZE = 100
PREVIEW_PAGE_SIZE = 1
METRIC_SETS_INCLUDE = 'metric_sets'
USERS_ME_PATH = '/api/v2/users/me.json'


def build_path(task: PluginTask, page: int = 1, is_preview: bool = False,
               start_time: Optional[int] = None) -> str:
    """Build the full request URL for one page of the task's target.

    Args:
        task: task configuration
        page: 1-based page number, only used by listing targets in run mode
        is_preview: build the cheap sample URL instead of the run URL
        start_time: epoch seconds overriding the task's start time for
            incremental targets in run mode

    Returns:
        URL string including the query string
    """
    if is_preview:
        base_url, params = _preview_request(task)
    else:
        base_url, params = _run_request(task, page, start_time)

    if task.includes and task.target.supports_include:
        includes = ','.join(task.includes)
        if not is_preview and task.target is Target.TICKET_METRICS:
            # Extends the include=metric_sets added for ticket metrics
            name, value = params[-1]
            params[-1] = (name, f'{value},{includes}')
        else:
            params.append(('include', includes))

    return f'{base_url}?{_join_query(params)}'


def build_credential_check_path(task: PluginTask) -> str:
    return f'{task.login_url}{USERS_ME_PATH}'


def api_prefix(task: PluginTask) -> str:
    """Every URL the connector may request starts with this prefix"""
    return f'{task.login_url}{API}/'


def _preview_request(task: PluginTask) -> Tuple[str, List[Tuple[str, object]]]:
    target = task.target
    params = []

    if target is Target.TICKET_METRICS:
        base_url = _endpoint(task.login_url, Target.TICKETS, target.supports_incremental)
        params.append(('include', METRIC_SETS_INCLUDE))
    else:
        base_url = _endpoint(task.login_url, target, target.supports_incremental)

    if target.supports_incremental:
        params.append(('start_time', 0))
    else:
        params.append(('per_page', PREVIEW_PAGE_SIZE))

    return base_url, params


def _run_request(task: PluginTask, page: int, start_time: Optional[int]) -> Tuple[str, List[Tuple[str, object]]]:
    if task.target is Target.TICKET_METRICS:
        base_url, params = _run_request_for_target(task, Target.TICKETS, page, start_time)
        params.append(('include', METRIC_SETS_INCLUDE))
        return base_url, params

    return _run_request_for_target(task, task.target, page, start_time)


def _run_request_for_target(task: PluginTask, target: Target, page: int,
                            start_time: Optional[int]) -> Tuple[str, List[Tuple[str, object]]]:
    base_url = _endpoint(task.login_url, target, target.supports_incremental)

    if target.supports_incremental:
        if start_time is None:
            start_time = task.start_time_epoch()
        return base_url, [('start_time', start_time if start_time is not None else 0)]

    return base_url, [('sort_by', 'id'), ('per_page', PAGE_SIZE), ('page', page)]


def _endpoint(login_url: str, target: Target, incremental: bool) -> str:
    api = API_INCREMENTAL if incremental else API
    return f'{login_url}{api}/{target.api_name}.json'


def _join_query(params) -> str:
    # Values are percent-encoded; include lists keep their literal commas
    return '&'.join(f'{name}={quote(str(value), safe=",")}' for name, value in params)
