"""Utilities for recording intercepted calls."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Protocol, Sequence


# ---------------------------------------------------------------------------
# Argument snapshots
# ---------------------------------------------------------------------------


def _is_index_path(value: Any) -> bool:
    return hasattr(value, "section") and hasattr(value, "row")


def format_value(value: Any, *, max_length: Optional[int] = None) -> str:
    """Render one argument for a call record.

    Index paths print as ``{section, row}`` and integers as plain numbers;
    anything else falls back to ``repr``.
    """

    try:
        if _is_index_path(value):
            text = f"{{{value.section}, {value.row}}}"
        elif isinstance(value, int) and not isinstance(value, bool):
            text = "%d" % value
        else:
            text = repr(value)
    except Exception:
        text = f"<unprintable {type(value).__name__}>"

    if max_length is not None and len(text) > max_length:
        text = text[:max_length] + "..."
    return text


def format_arguments(
    args: Sequence[Any],
    kwargs: Optional[dict[str, Any]] = None,
    *,
    skip: int = 0,
    max_length: Optional[int] = None,
) -> str:
    """Render a call's arguments as ``(a, b, key=value)``.

    ``skip`` leaves out leading positional arguments, typically the sender
    object every table view callback receives first.
    """

    parts = [format_value(arg, max_length=max_length) for arg in list(args)[skip:]]
    for key, value in (kwargs or {}).items():
        parts.append(f"{key}={format_value(value, max_length=max_length)}")
    return "(" + ", ".join(parts) + ")"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass
class CallRecord:
    method: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    arguments: str
    target: str
    timestamp: Optional[datetime] = None

    @classmethod
    def capture(
        cls,
        method: str,
        args: Sequence[Any],
        kwargs: Optional[dict[str, Any]],
        *,
        target: Any,
        skip: int = 0,
        max_length: Optional[int] = None,
        timestamp: bool = True,
    ) -> "CallRecord":
        kwargs = dict(kwargs or {})
        return cls(
            method=method,
            args=tuple(args),
            kwargs=kwargs,
            arguments=format_arguments(args, kwargs, skip=skip, max_length=max_length),
            target=type(target).__name__,
            timestamp=datetime.now(timezone.utc) if timestamp else None,
        )

    def describe(self) -> str:
        return f"{self.method}{self.arguments}"


# ---------------------------------------------------------------------------
# Recorders
# ---------------------------------------------------------------------------


class CallRecorder(Protocol):
    def record(self, record: CallRecord) -> None:  # pragma: no cover - interface
        ...


class NoopRecorder:
    """Drop every record; used when call recording is switched off."""

    def record(self, record: CallRecord) -> None:
        return None


class LoggingRecorder:
    """Write each call as ``method(arguments)`` to a logger."""

    def __init__(
        self, logger: Optional[logging.Logger] = None, level: int = logging.INFO
    ) -> None:
        self.logger = logger or logging.getLogger("delegate_proxy.calls")
        self.level = level

    def record(self, record: CallRecord) -> None:
        self.logger.log(self.level, "%s", record.describe())


@dataclass
class MemoryRecorder:
    """Keep every record in a list, in arrival order."""

    records: List[CallRecord] = field(default_factory=list)

    def record(self, record: CallRecord) -> None:
        self.records.append(record)

    def methods(self) -> List[str]:
        return [record.method for record in self.records]

    def clear(self) -> None:
        self.records.clear()

    def __len__(self) -> int:
        return len(self.records)


class FanoutRecorder:
    """Hand each record to several recorders in order."""

    def __init__(self, *recorders: CallRecorder) -> None:
        self.recorders = recorders

    def record(self, record: CallRecord) -> None:
        for recorder in self.recorders:
            recorder.record(record)


class CallbackRecorder:
    """Adapt a plain callable into a recorder."""

    def __init__(self, callback: Callable[[CallRecord], Any]) -> None:
        self.callback = callback

    def record(self, record: CallRecord) -> None:
        self.callback(record)

