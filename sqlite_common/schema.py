"""Per-table outcome of schema creation and teardown"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import SchemaError


class TableStatus(Enum):
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"  # not attempted after an earlier failure


@dataclass(frozen=True)
class TableOutcome:
    name: str
    status: TableStatus
    error: Optional[Exception] = None


@dataclass
class SchemaReport:
    """Result of create_tables() or drop_tables()

    Schema work never raises on its own; callers that treat a partial
    schema as fatal call raise_for_failure().
    """

    action: str  # "create" or "drop"
    outcomes: List[TableOutcome] = field(default_factory=list)

    @property
    def ok(self):
        return all(o.status is TableStatus.OK for o in self.outcomes)

    @property
    def succeeded(self):
        return [o.name for o in self.outcomes if o.status is TableStatus.OK]

    @property
    def failed(self):
        return [o.name for o in self.outcomes if o.status is TableStatus.FAILED]

    @property
    def skipped(self):
        return [o.name for o in self.outcomes if o.status is TableStatus.SKIPPED]

    def raise_for_failure(self):
        """Raise SchemaError for the first failed table, if any"""
        for outcome in self.outcomes:
            if outcome.status is TableStatus.FAILED:
                action = "creating" if self.action == "create" else "dropping"
                raise SchemaError(action, outcome.name, outcome.error) from outcome.error
