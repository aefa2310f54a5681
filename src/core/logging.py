from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional, Union


# Context variables for enriched logging
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
unit_of_work_id_var: ContextVar[Optional[str]] = ContextVar("unit_of_work_id", default=None)


class LoggingContextFilter(logging.Filter):
    """
    Logging filter that injects correlation_id and the unit-of-work id from
    contextvars into each log record so formatters can include them.

    If no values are present in the context, placeholders are used.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        cid = correlation_id_var.get()
        uow = unit_of_work_id_var.get()
        setattr(record, "correlation_id", cid or "-")
        setattr(record, "uow", uow or "-")
        return True


# PUBLIC_INTERFACE
def configure_logging(level: Union[int, str] = logging.INFO, sql_echo: bool = False) -> None:
    """
    Configure root logging with a structured format and context filter.

    SQLAlchemy engine logging stays at WARNING unless `sql_echo` is set, so
    DEBUG runs show query names and parameters without every emitted statement.
    """
    handler = logging.StreamHandler(stream=sys.stdout)
    fmt = (
        "%(asctime)s | %(levelname)s | %(name)s | cid=%(correlation_id)s | uow=%(uow)s | "
        "%(message)s"
    )
    formatter = logging.Formatter(fmt=fmt)
    handler.setFormatter(formatter)
    handler.addFilter(LoggingContextFilter())

    root = logging.getLogger()
    # Remove pre-existing default handlers configured elsewhere (e.g., basicConfig)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if sql_echo else logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
