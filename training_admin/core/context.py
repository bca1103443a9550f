"""Request context management using contextvars.

Every request gets a request ID and, once authenticated, the admin ID.
Both are picked up by the logging processors without being passed around.
"""

from contextvars import ContextVar, Token
from typing import Any
from uuid import uuid4


request_id_var: ContextVar[str] = ContextVar("request_id", default="")
admin_id_var: ContextVar[str | None] = ContextVar("admin_id", default=None)
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)

_OPTIONAL_VARS: dict[str, ContextVar[str | None]] = {
    "admin_id": admin_id_var,
    "trace_id": trace_id_var,
}


def generate_request_id() -> str:
    """Generate a new unique request ID."""
    return str(uuid4())


def get_request_id() -> str:
    """Get the current request ID."""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """Set the request ID for the current context.

    Args:
        request_id: Incoming request ID. A new one is generated when missing.

    Returns:
        The request ID that was set.
    """
    rid = request_id or generate_request_id()
    request_id_var.set(rid)
    return rid


def get_admin_id() -> str | None:
    """Get the authenticated admin ID."""
    return admin_id_var.get()


def set_admin_id(admin_id: str | None) -> None:
    """Bind the authenticated admin to the current context."""
    admin_id_var.set(str(admin_id) if admin_id is not None else None)


def set_trace_id(trace_id: str | None) -> None:
    """Bind a distributed tracing ID to the current context."""
    trace_id_var.set(trace_id)


def get_context() -> dict[str, Any]:
    """Get the non-empty context variables as a dictionary."""
    context: dict[str, Any] = {}

    request_id = get_request_id()
    if request_id:
        context["request_id"] = request_id

    for name, var in _OPTIONAL_VARS.items():
        value = var.get()
        if value:
            context[name] = value

    return context


def clear_context() -> None:
    """Reset all context variables at the end of a request."""
    request_id_var.set("")
    for var in _OPTIONAL_VARS.values():
        var.set(None)


class RequestContext:
    """Context manager binding a request scope outside of HTTP handling.

    Usage:
        with RequestContext(admin_id="..."):
            logger.info("seeding_state")  # includes request_id and admin_id
    """

    def __init__(
        self,
        request_id: str | None = None,
        admin_id: str | None = None,
    ) -> None:
        self.request_id = request_id
        self.admin_id = admin_id
        self._tokens: list[tuple[ContextVar, Token]] = []

    def __enter__(self) -> "RequestContext":
        self._tokens.append(
            (request_id_var, request_id_var.set(self.request_id or generate_request_id()))
        )
        if self.admin_id is not None:
            self._tokens.append((admin_id_var, admin_id_var.set(self.admin_id)))
        return self

    def __exit__(self, *_: object) -> None:
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens.clear()
