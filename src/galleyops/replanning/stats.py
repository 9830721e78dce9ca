"""Statistics over the reassignment log."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from galleyops.replanning.models import Reassignment, ReassignmentStatus


@dataclass
class ReassignmentStats:
    """Container for reassignment log statistics."""

    total: int = 0
    by_status: Dict[str, int] = field(default_factory=dict)
    by_airline: Dict[str, int] = field(default_factory=dict)
    meals_reassigned: int = 0
    bottles_reassigned: int = 0

    @property
    def success_rate(self) -> float:
        """Share of records with status success, in percent."""
        if not self.total:
            return 0.0
        return self.by_status.get(ReassignmentStatus.SUCCESS.value, 0) / self.total * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "by_status": self.by_status,
            "by_airline": self.by_airline,
            "meals_reassigned": self.meals_reassigned,
            "bottles_reassigned": self.bottles_reassigned,
            "success_rate": self.success_rate,
        }

    def status_dataframe(self) -> pd.DataFrame:
        """Return by_status as DataFrame."""
        if not self.by_status:
            return pd.DataFrame(columns=["status", "count"])
        return pd.DataFrame(
            [{"status": k, "count": v} for k, v in sorted(self.by_status.items())]
        )


def summarize_reassignments(records: List[Reassignment]) -> ReassignmentStats:
    """Compute statistics from reassignment records."""
    stats = ReassignmentStats()
    stats.total = len(records)

    for r in records:
        status = r.status.value
        stats.by_status[status] = stats.by_status.get(status, 0) + 1
        stats.by_airline[r.airline_code] = stats.by_airline.get(r.airline_code, 0) + 1
        stats.meals_reassigned += r.meals_reassigned
        stats.bottles_reassigned += r.bottles_reassigned

    return stats
