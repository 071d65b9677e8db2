"""
Operation tracing for request handlers.

Handlers call the repository through a tracer, which gets three extension
points per database operation: before the call, after it returns, and when
it raises. The base tracer does nothing; LoggingTracer writes the debug log
lines enabled by the DEBUG setting.

Tracer hooks never change what a handler does: a hook that raises is logged
and ignored.
"""

import logging
from typing import Any, Callable, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationTracer:
    """No-op tracer. Subclasses override the hooks they need."""

    def before(self, operation: str, args: Sequence[Any]) -> None:
        pass

    def after(self, operation: str, result: Any) -> None:
        pass

    def error(self, operation: str, exc: Exception) -> None:
        pass

    def run(self, operation: str, func: Callable[..., T], *args: Any) -> T:
        """Call func(*args), invoking the hooks around it.

        Exceptions raised by func propagate unchanged.
        """
        self._safe(self.before, operation, args)
        try:
            result = func(*args)
        except Exception as exc:
            self._safe(self.error, operation, exc)
            raise
        self._safe(self.after, operation, result)
        return result

    def _safe(self, hook: Callable[..., None], operation: str, value: Any) -> None:
        try:
            hook(operation, value)
        except Exception:
            logger.exception("Tracer hook %s failed for operation=%s", hook.__name__, operation)


class LoggingTracer(OperationTracer):
    """Writes a human-readable log line at each extension point."""

    def __init__(self, trace_logger: logging.Logger | None = None) -> None:
        self.logger = trace_logger or logger

    def before(self, operation: str, args: Sequence[Any]) -> None:
        self.logger.info("Starting %s args=%s", operation, list(args))

    def after(self, operation: str, result: Any) -> None:
        self.logger.info("Finished %s result=%s", operation, _describe(result))

    def error(self, operation: str, exc: Exception) -> None:
        self.logger.info("Failed %s error=%s: %s", operation, type(exc).__name__, exc)


def _describe(result: Any) -> str:
    if isinstance(result, list):
        return f"{len(result)} rows"
    return repr(result)


def build_tracer(debug: bool) -> OperationTracer:
    """Pick the tracer for the DEBUG setting."""
    if debug:
        return LoggingTracer()
    return OperationTracer()
