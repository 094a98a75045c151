"""Parse event log — an audit trail of what one parser did.

A parser touches more than the file it was asked for: it renders the
request file, splices in body files with ``<``, and turns out one
request per unit.  When a request comes out wrong, the question is
usually "which files went into it?".  The event log answers that.

There are exactly three kinds of event:

- **RENDERED** — a request file was rendered (detail: its size).
- **INCLUDED** — a body file was spliced into a unit (detail: its name).
- **PARSED** — a unit was completed (detail: ``METHOD URL``).

Failures are raised to the caller and never recorded here; a parse that
fails half-way leaves only the events that happened before the failure.

Design choices:
    - **StrEnum for kinds** so an event prints as ``rendered`` etc.
    - **Frozen dataclass for events** — history should be immutable.
    - **unit is 1-based** — 0 means the event concerns the whole file.
"""

from dataclasses import dataclass
from enum import StrEnum


class EventKind(StrEnum):
    """The things a parser reports doing."""

    RENDERED = "rendered"
    INCLUDED = "included"
    PARSED = "parsed"


@dataclass(frozen=True)
class ParseEvent:
    """One recorded parser action.

    Attributes:
        kind: What happened.
        file: Resolved path of the request file being parsed.
        detail: Kind-specific description (size, included name, request).
        unit: 1-based request number within the file (0 = whole file).

    """

    kind: EventKind
    file: str
    detail: str
    unit: int = 0

    def __str__(self) -> str:
        """Format as ``file#unit: kind detail`` (``#unit`` omitted for 0)."""
        where = f"{self.file}#{self.unit}" if self.unit else self.file
        return f"{where}: {self.kind} {self.detail}"


class EventLog:
    """Append-only record of parse events, queryable by kind and file."""

    def __init__(self) -> None:
        """Create an empty log."""
        self._events: list[ParseEvent] = []

    @property
    def events(self) -> list[ParseEvent]:
        """Return every event in the order it happened."""
        return list(self._events)

    def record(self, kind: EventKind, file: str, detail: str, *, unit: int = 0) -> None:
        """Append an event.

        Args:
            kind: What happened.
            file: The request file it happened to.
            detail: Kind-specific description.
            unit: Request number within the file, or 0.

        """
        self._events.append(ParseEvent(kind=kind, file=file, detail=detail, unit=unit))

    def select(self, kind: EventKind | None = None, *, file: str | None = None) -> list[ParseEvent]:
        """Return the events of *kind* and/or for *file*, in order."""
        return [
            e
            for e in self._events
            if (kind is None or e.kind is kind) and (file is None or e.file == file)
        ]

    def includes(self, file: str, unit: int) -> list[str]:
        """Return the names of the body files spliced into one unit."""
        return [e.detail for e in self.select(EventKind.INCLUDED, file=file) if e.unit == unit]
