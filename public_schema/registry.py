"""
Visibility registry shared by the redactor and the validation rule.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, Tuple

# Owner recorded for whole types; the reserved prefix keeps it apart from real type names.
TOP_LEVEL_OWNER = "__root__"


@dataclass(frozen=True)
class PrivateFieldRecord:
    """One private declaration, keyed by its owner and its own name."""

    type_name: str
    field_name: str


@dataclass(frozen=True)
class _Snapshot:
    records: Tuple[PrivateFieldRecord, ...]
    index: Dict[str, FrozenSet[str]]


def _build_snapshot(records: Iterable[PrivateFieldRecord]) -> _Snapshot:
    ordered = tuple(records)
    grouped: Dict[str, set] = {}
    for record in ordered:
        grouped.setdefault(record.type_name, set()).add(record.field_name)
    return _Snapshot(
        records=ordered,
        index={name: frozenset(fields) for name, fields in grouped.items()},
    )


class VisibilityRegistry:
    """
    Set of private (type name, field name) pairs for one schema version.

    Each scan publishes a complete snapshot with a single assignment, so
    concurrent readers see either the previous scan or the new one.
    """

    def __init__(self, records: Iterable[PrivateFieldRecord] = ()):
        self._snapshot = _build_snapshot(records)

    def replace(self, records: Iterable[PrivateFieldRecord]) -> None:
        """Swap in a new set of records, discarding the previous scan."""
        self._snapshot = _build_snapshot(records)

    def is_private(self, field_name: str, type_name: str) -> bool:
        return field_name in self._snapshot.index.get(type_name, frozenset())

    def private_fields(self, type_name: str) -> FrozenSet[str]:
        return self._snapshot.index.get(type_name, frozenset())

    def private_member_names(self) -> FrozenSet[str]:
        """All private member names regardless of owner."""
        snapshot = self._snapshot
        return frozenset(
            record.field_name
            for record in snapshot.records
            if record.type_name != TOP_LEVEL_OWNER
        )

    def __contains__(self, record: object) -> bool:
        if not isinstance(record, PrivateFieldRecord):
            return False
        return self.is_private(record.field_name, record.type_name)

    def __iter__(self) -> Iterator[PrivateFieldRecord]:
        return iter(self._snapshot.records)

    def __len__(self) -> int:
        return len(self._snapshot.records)

    def __repr__(self) -> str:
        return f"<VisibilityRegistry records={len(self)}>"
