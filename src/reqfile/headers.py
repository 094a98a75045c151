"""Case-insensitive, multi-valued, ordered header fields.

HTTP header names are case-insensitive (``Accept`` and ``accept`` are the
same field) and a name may appear more than once.  A plain ``dict``
handles neither, so ``Headers`` keeps an explicit list of
``(name, value)`` pairs in the order they were added and compares names
with ``str.casefold``.
"""

from collections.abc import Iterator, Mapping, Sequence


def canonical_name(name: str) -> str:
    """Return the MIME canonical form of a header name.

    The first letter and every letter after a hyphen are upper-cased, the
    rest lower-cased: ``content-TYPE`` becomes ``Content-Type``.
    """
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


class Headers:
    """An ordered association list of header fields."""

    def __init__(self, fields: Sequence[tuple[str, str]] | None = None) -> None:
        """Create a header map, optionally pre-populated with *fields*."""
        self._fields: list[tuple[str, str]] = list(fields) if fields else []

    def add(self, name: str, value: str) -> None:
        """Append a field, keeping any existing values for *name*."""
        self._fields.append((name, value))

    def set(self, name: str, value: str) -> None:
        """Replace every value of *name* with a single *value*."""
        self.remove(name)
        self._fields.append((name, value))

    def remove(self, name: str) -> None:
        """Drop every field called *name* (no error if absent)."""
        key = name.casefold()
        self._fields = [(n, v) for n, v in self._fields if n.casefold() != key]

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of *name*, or *default*."""
        key = name.casefold()
        for n, v in self._fields:
            if n.casefold() == key:
                return v
        return default

    def get_all(self, name: str) -> list[str]:
        """Return every value of *name* in insertion order."""
        key = name.casefold()
        return [v for n, v in self._fields if n.casefold() == key]

    def items(self) -> list[tuple[str, str]]:
        """Return all fields as (name, value) pairs in insertion order."""
        return list(self._fields)

    def to_dict(self) -> dict[str, list[str]]:
        """Return a ``name -> values`` dict keyed by first-seen spelling."""
        result: dict[str, list[str]] = {}
        for name in self:
            result[name] = self.get_all(name)
        return result

    def __getitem__(self, name: str) -> str:
        """Return the first value of *name*.

        Raises:
            KeyError: If no field called *name* exists.

        """
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __contains__(self, name: object) -> bool:
        """Return True if a field called *name* exists (any case)."""
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __iter__(self) -> Iterator[str]:
        """Yield each distinct field name once, in first-seen order."""
        seen: set[str] = set()
        for name, _ in self._fields:
            key = name.casefold()
            if key not in seen:
                seen.add(key)
                yield name

    def __len__(self) -> int:
        """Return the number of fields (repeated names count each time)."""
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        """Compare field-by-field, ignoring name case.

        A ``dict`` of ``name -> list of values`` compares equal when it
        holds the same names and values.
        """
        if isinstance(other, Headers):
            return _folded(self._fields) == _folded(other._fields)
        if isinstance(other, Mapping):
            pairs = [(str(n), v) for n, values in other.items() for v in values]
            return _folded_groups(self._fields) == _folded_groups(pairs)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"Headers({self._fields!r})"


def _folded(fields: list[tuple[str, str]]) -> list[tuple[str, str]]:
    """Return *fields* with case-folded names."""
    return [(n.casefold(), v) for n, v in fields]


def _folded_groups(fields: list[tuple[str, str]]) -> dict[str, list[str]]:
    """Group *fields* by case-folded name, keeping value order per name."""
    groups: dict[str, list[str]] = {}
    for name, value in fields:
        groups.setdefault(name.casefold(), []).append(value)
    return groups
