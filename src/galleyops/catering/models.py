"""Bottle handling rules and vision-check records."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class BottleAction(str, Enum):
    REUSE = "reuse"
    COMBINE = "combine"
    DISCARD = "discard"


DEFAULT_REUSE_THRESHOLD = 70
DEFAULT_COMBINE_THRESHOLD = 40


@dataclass
class AirlineRule:
    """Per-airline fill-level cutoffs: above reuse -> reuse, from combine up -> combine, else discard."""

    airline: str
    reuse_threshold: int = DEFAULT_REUSE_THRESHOLD
    combine_threshold: int = DEFAULT_COMBINE_THRESHOLD
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        for name in ("reuse_threshold", "combine_threshold"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be within 0-100, got {value}")
        if self.combine_threshold > self.reuse_threshold:
            raise ValueError(
                f"combine_threshold ({self.combine_threshold}) cannot exceed "
                f"reuse_threshold ({self.reuse_threshold})"
            )


@dataclass
class BottleAnalysis:
    """Result of a bottle fill-level check."""

    flight_id: Optional[str]
    fill_level: int
    recommended_action: BottleAction
    bottle_type: Optional[str] = None
    ai_analysis: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        self.recommended_action = BottleAction(self.recommended_action)


@dataclass
class TrolleyVerification:
    """Result of comparing a trolley photo against its reference layout."""

    flight_id: Optional[str]
    golden_layout_name: str = "Standard Layout"
    has_errors: bool = False
    errors: List[str] = field(default_factory=list)
    ai_analysis: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class EmployeeMetric:
    """Trolley preparation performance for one employee."""

    employee_name: str
    avg_prep_time: float
    error_rate: float
    compliance_rate: float
    trolleys_processed: int
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if not self.employee_name or not self.employee_name.strip():
            raise ValueError("employee_name is required")
        if self.avg_prep_time < 0:
            raise ValueError(f"avg_prep_time must be non-negative, got {self.avg_prep_time}")
        for name in ("error_rate", "compliance_rate"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be within 0-100, got {value}")
        if self.trolleys_processed < 0:
            raise ValueError(
                f"trolleys_processed must be non-negative, got {self.trolleys_processed}"
            )

    @property
    def rating(self) -> str:
        """Excellent above 95% compliance with under 3% errors, otherwise Good."""
        if self.compliance_rate > 95 and self.error_rate < 3:
            return "Excellent"
        return "Good"
