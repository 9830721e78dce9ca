"""Demo data set for the dashboard and the `galleyops process --demo` and `metrics` commands."""

from datetime import datetime, timedelta
from typing import List, Optional

from galleyops.catering.models import (
    AirlineRule,
    BottleAnalysis,
    EmployeeMetric,
    TrolleyVerification,
)
from galleyops.replanning.models import Flight

# (flight_number, airline, destination, hours from now, status, meals, bottles, reliability)
_DEMO_FLIGHTS = [
    ("AM651", "AeroMexico", "New York (JFK)", 2, "scheduled", 180, 90, 85),
    ("UA1234", "United", "Los Angeles (LAX)", 4, "scheduled", 220, 110, 60),
    ("AA789", "American Airlines", "Miami (MIA)", 6, "delayed", 150, 75, 45),
    ("DL456", "Delta", "Atlanta (ATL)", 8, "scheduled", 200, 100, 92),
    ("AM245", "AeroMexico", "Cancun (CUN)", 1, "delayed", 160, 80, 55),
    ("AM892", "AeroMexico", "Mexico City (MEX)", 5, "scheduled", 170, 85, 78),
    ("DL321", "Delta", "Chicago (ORD)", 3, "cancelled", 170, 85, 30),
]


def demo_flights(now: Optional[datetime] = None) -> List[Flight]:
    """Demo flights with departures relative to `now`."""
    now = now or datetime.now()
    return [
        Flight(
            flight_number=number,
            airline=airline,
            destination=destination,
            departure_time=now + timedelta(hours=hours),
            status=status,
            planned_meals=meals,
            planned_bottles=bottles,
            reliability=reliability,
        )
        for number, airline, destination, hours, status, meals, bottles, reliability in _DEMO_FLIGHTS
    ]


def demo_rules() -> List[AirlineRule]:
    return [
        AirlineRule(airline="AeroMexico", reuse_threshold=70, combine_threshold=40),
        AirlineRule(airline="United", reuse_threshold=75, combine_threshold=35),
        AirlineRule(airline="American Airlines", reuse_threshold=65, combine_threshold=45),
    ]


def demo_bottle_analyses() -> List[BottleAnalysis]:
    return [
        BottleAnalysis(
            flight_id=None,
            bottle_type="Wine - Red",
            fill_level=85,
            recommended_action="reuse",
            ai_analysis="Bottle appears to be 85% full with wine. Recommended for reuse on next flight.",
        ),
        BottleAnalysis(
            flight_id=None,
            bottle_type="Champagne",
            fill_level=55,
            recommended_action="combine",
            ai_analysis="Bottle is 55% full. Recommended to combine with similar bottles.",
        ),
        BottleAnalysis(
            flight_id=None,
            bottle_type="Vodka",
            fill_level=25,
            recommended_action="discard",
            ai_analysis="Bottle is only 25% full. Below threshold for reuse or combination.",
        ),
        BottleAnalysis(
            flight_id=None,
            bottle_type="Whiskey",
            fill_level=78,
            recommended_action="reuse",
            ai_analysis="Bottle is 78% full. Excellent condition for reuse on next flight.",
        ),
    ]


def demo_trolley_verifications() -> List[TrolleyVerification]:
    return [
        TrolleyVerification(
            flight_id=None,
            golden_layout_name="Standard Economy Layout",
            ai_analysis="All items correctly positioned.",
        ),
        TrolleyVerification(
            flight_id=None,
            golden_layout_name="Business Class Layout",
            has_errors=True,
            errors=["Missing 1 drink item in row 3", "Incorrect snack type detected in row 2"],
            ai_analysis="Found 2 discrepancies compared to the reference layout.",
        ),
        TrolleyVerification(
            flight_id=None,
            golden_layout_name="Premium Economy Layout",
            ai_analysis="Matches the reference layout. No errors detected.",
        ),
    ]


# (name, avg prep minutes, error %, compliance %, trolleys processed)
_DEMO_EMPLOYEES = [
    ("Maria Garcia", 12.5, 2.1, 97.9, 45),
    ("John Smith", 14.2, 3.5, 96.5, 38),
    ("Carlos Rodriguez", 11.8, 1.8, 98.2, 52),
    ("Lisa Chen", 13.1, 2.7, 97.3, 41),
]


def demo_employee_metrics() -> List[EmployeeMetric]:
    return [
        EmployeeMetric(
            employee_name=name,
            avg_prep_time=prep,
            error_rate=errors,
            compliance_rate=compliance,
            trolleys_processed=trolleys,
        )
        for name, prep, errors, compliance, trolleys in _DEMO_EMPLOYEES
    ]
