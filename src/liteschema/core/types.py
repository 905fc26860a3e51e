"""Core data types for liteschema."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# One result row, keyed by column name in result order.
Record = dict[str, Any]


class ConflictMode(str, Enum):
    """How save_record resolves a uniqueness conflict."""

    OVERWRITE = "overwrite"
    IGNORE = "ignore"


class MigrationStatus(str, Enum):
    """Outcome of a completed migration run."""

    UP_TO_DATE = "up-to-date"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class Migration:
    """A single schema migration.

    Attributes:
        version: Ordinal of the migration, a positive integer.
        source: SQL source, one or more statements.
        origin: Where the migration came from (file name), for diagnostics.
    """

    version: int
    source: str
    origin: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.version, bool) or not isinstance(self.version, int):
            raise ValueError(f"Migration version must be an int, got {self.version!r}")
        if self.version < 1:
            raise ValueError(f"Migration version must be positive, got {self.version}")

    def __repr__(self) -> str:
        return f"Migration({self.version}, {self.origin!r})"


@dataclass
class MigrationReport:
    """Result of a migrate() call that did not fail."""

    status: MigrationStatus
    from_version: int
    to_version: int
    applied: list[int] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.applied)
