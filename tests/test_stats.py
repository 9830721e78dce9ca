"""Unit tests for reassignment statistics."""

from datetime import timedelta

from galleyops.replanning.models import Reassignment
from galleyops.replanning.stats import summarize_reassignments

from helpers import make_flight


def test_summarize_empty() -> None:
    stats = summarize_reassignments([])
    assert stats.total == 0
    assert stats.success_rate == 0.0
    assert stats.status_dataframe().empty


def test_summarize_records() -> None:
    source = make_flight("AM245", status="delayed", meals=160, bottles=80)
    target = make_flight("AM651", departs_in=timedelta(hours=3))
    records = [
        Reassignment.success(source, target, "AM"),
        Reassignment.no_flight(make_flight("DL321", "Delta", status="cancelled"), "DL", "none"),
    ]

    stats = summarize_reassignments(records)

    assert stats.total == 2
    assert stats.by_status == {"success": 1, "no_flight": 1}
    assert stats.by_airline == {"AM": 1, "DL": 1}
    assert stats.meals_reassigned == 160
    assert stats.bottles_reassigned == 80
    assert stats.success_rate == 50.0
    assert stats.to_dict()["success_rate"] == 50.0
