"""Correlation ID tracking for reconciliation logging.

Every log record emitted while a load balancer is being reconciled carries
that load balancer's name (``cluster/namespace/name``) as correlation ID, so
the gateway calls of one reconciliation can be grouped in the JSON logs.
"""

from contextvars import ContextVar, Token
from types import TracebackType

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Get the correlation ID for the current context."""
    return _correlation_id_var.get()


class TracingContext:
    """Context manager scoping a correlation ID to a code block.

    The previous ID is restored on exit, so contexts nest.

    Example:
        >>> with TracingContext("kubernetes/default/web") as corr_id:
        ...     print(corr_id)
        kubernetes/default/web
    """

    def __init__(self, correlation_id: str) -> None:
        self.correlation_id = correlation_id
        self._token: Token[str | None] | None = None

    def __enter__(self) -> str:
        self._token = _correlation_id_var.set(self.correlation_id)
        return self.correlation_id

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _correlation_id_var.reset(self._token)
            self._token = None


__all__ = ["TracingContext", "get_correlation_id"]
