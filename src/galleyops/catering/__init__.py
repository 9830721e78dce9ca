"""Bottle disposition, trolley checks, employee performance, and dashboard metrics."""

from galleyops.catering.bottles import record_bottle_check, recommend_action
from galleyops.catering.metrics import (
    DashboardMetrics,
    compute_dashboard_metrics,
    employees_dataframe,
)
from galleyops.catering.models import (
    AirlineRule,
    BottleAction,
    BottleAnalysis,
    EmployeeMetric,
    TrolleyVerification,
)

__all__ = [
    "AirlineRule",
    "BottleAction",
    "BottleAnalysis",
    "DashboardMetrics",
    "EmployeeMetric",
    "TrolleyVerification",
    "compute_dashboard_metrics",
    "employees_dataframe",
    "record_bottle_check",
    "recommend_action",
]
