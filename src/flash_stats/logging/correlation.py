"""Correlation ID management for tying log lines to one simulation run."""

from __future__ import annotations

import contextvars
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

# Context variable to store the current correlation ID
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)

# Context variable to store run-level fields (trace name, period, ...)
run_fields_var: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "run_fields", default={}
)


def get_correlation_id() -> str:
    """Get the current correlation ID from the context."""
    return correlation_id_var.get("")


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def get_run_fields() -> dict[str, Any]:
    return run_fields_var.get({})


def get_log_context() -> dict[str, Any]:
    """Return the fields every JSON log line of the current run should carry."""
    context: dict[str, Any] = {}
    correlation_id = get_correlation_id()
    if correlation_id:
        context["correlation_id"] = correlation_id
    context.update(get_run_fields())
    return context


@contextmanager
def run_context(run_id: str | None = None, **run_fields: Any) -> Iterator[str]:
    """Context manager for setting the run correlation ID and run fields.

    Args:
        run_id: Optional correlation ID. If None, a new one will be generated.
        **run_fields: Extra fields to include in every log line of the run.

    Yields:
        The correlation ID in effect.
    """
    correlation_id = run_id or generate_correlation_id()
    token_correlation = correlation_id_var.set(correlation_id)
    token_fields = run_fields_var.set({**get_run_fields(), **run_fields})

    try:
        yield correlation_id
    finally:
        correlation_id_var.reset(token_correlation)
        run_fields_var.reset(token_fields)
