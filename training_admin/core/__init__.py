# Core infrastructure
from training_admin.core.context import (
    RequestContext,
    clear_context,
    get_admin_id,
    get_context,
    get_request_id,
    set_admin_id,
    set_request_id,
)
from training_admin.core.logging import configure_structlog, get_logger
from training_admin.core.middleware import RequestContextMiddleware


__all__ = [
    "RequestContext",
    "RequestContextMiddleware",
    "clear_context",
    "configure_structlog",
    "get_admin_id",
    "get_context",
    "get_logger",
    "get_request_id",
    "set_admin_id",
    "set_request_id",
]
