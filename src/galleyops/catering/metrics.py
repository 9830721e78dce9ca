"""Dashboard aggregates over flights and catering checks."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

import pandas as pd

from galleyops.catering.models import (
    BottleAction,
    BottleAnalysis,
    EmployeeMetric,
    TrolleyVerification,
)
from galleyops.replanning.models import Flight


@dataclass
class DashboardMetrics:
    """Container for dashboard headline numbers. Rates are percentages."""

    total_flights: int = 0
    average_reliability: float = 0.0
    employee_efficiency: float = 100.0
    food_saved: int = 0
    bottles_reused: int = 0
    bottles_combined: int = 0
    bottles_discarded: int = 0
    trolley_error_rate: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def bottle_dataframe(self) -> pd.DataFrame:
        """Return bottle action counts as DataFrame."""
        return pd.DataFrame(
            [
                {"action": BottleAction.REUSE.value, "count": self.bottles_reused},
                {"action": BottleAction.COMBINE.value, "count": self.bottles_combined},
                {"action": BottleAction.DISCARD.value, "count": self.bottles_discarded},
            ]
        )


def compute_dashboard_metrics(
    flights: List[Flight],
    analyses: List[BottleAnalysis],
    verifications: List[TrolleyVerification],
) -> DashboardMetrics:
    """Compute dashboard metrics from the current flights and check records."""
    metrics = DashboardMetrics(total_flights=len(flights))

    scored = [f.reliability for f in flights if f.reliability is not None]
    if scored:
        metrics.average_reliability = sum(scored) / len(scored)

    # Meals on disrupted flights are the ones replanning can save
    metrics.food_saved = sum(f.planned_meals for f in flights if f.is_disrupted)

    for a in analyses:
        if a.recommended_action is BottleAction.REUSE:
            metrics.bottles_reused += 1
        elif a.recommended_action is BottleAction.COMBINE:
            metrics.bottles_combined += 1
        else:
            metrics.bottles_discarded += 1

    if analyses:
        kept = len(analyses) - metrics.bottles_discarded
        metrics.employee_efficiency = kept / len(analyses) * 100

    if verifications:
        errors = sum(1 for v in verifications if v.has_errors)
        metrics.trolley_error_rate = errors / len(verifications) * 100

    return metrics


def employees_dataframe(employees: List[EmployeeMetric]) -> pd.DataFrame:
    """Employee performance table with a rating column."""
    columns = [
        "employee_name",
        "avg_prep_time",
        "error_rate",
        "compliance_rate",
        "trolleys_processed",
        "rating",
    ]
    return pd.DataFrame(
        [
            {
                "employee_name": e.employee_name,
                "avg_prep_time": e.avg_prep_time,
                "error_rate": e.error_rate,
                "compliance_rate": e.compliance_rate,
                "trolleys_processed": e.trolleys_processed,
                "rating": e.rating,
            }
            for e in employees
        ],
        columns=columns,
    )
