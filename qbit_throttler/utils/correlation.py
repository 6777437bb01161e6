"""
Poll cycle IDs for log tracing.
"""
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

# Context variable to store the ID of the poll cycle currently running
cycle_id_var: ContextVar[str] = ContextVar("cycle_id", default="")


def get_cycle_id() -> str:
    """Get the ID of the current poll cycle."""
    return cycle_id_var.get()


@contextmanager
def poll_cycle(cycle_id: str = "") -> Iterator[str]:
    """
    Bind a cycle ID to every log line emitted inside the block.

    The ID is generated as a short UUID when not supplied and is reset on exit.
    """
    if not cycle_id:
        cycle_id = str(uuid.uuid4())[:8]  # Short 8-char ID for readability

    token = cycle_id_var.set(cycle_id)
    try:
        yield cycle_id
    finally:
        cycle_id_var.reset(token)


def cycle_id_filter(record):
    """
    Loguru filter that adds cycle_id to log records.
    """
    record["extra"]["cycle_id"] = get_cycle_id() or "-"
    return True
