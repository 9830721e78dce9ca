"""Unit tests for bottle disposition, employee performance, and dashboard metrics."""

import pytest

from galleyops.catering import (
    AirlineRule,
    BottleAction,
    BottleAnalysis,
    EmployeeMetric,
    TrolleyVerification,
    compute_dashboard_metrics,
    employees_dataframe,
    record_bottle_check,
    recommend_action,
)

from helpers import make_flight


class TestRecommendAction:
    """Tests for recommend_action."""

    @pytest.mark.parametrize(
        "fill, expected",
        [
            (100, BottleAction.REUSE),
            (71, BottleAction.REUSE),
            (70, BottleAction.COMBINE),
            (40, BottleAction.COMBINE),
            (39, BottleAction.DISCARD),
            (0, BottleAction.DISCARD),
        ],
    )
    def test_default_cutoffs(self, fill, expected) -> None:
        assert recommend_action(fill) is expected

    def test_airline_rule_cutoffs(self) -> None:
        rule = AirlineRule(airline="United", reuse_threshold=75, combine_threshold=35)
        assert recommend_action(72, rule) is BottleAction.COMBINE
        assert recommend_action(36, rule) is BottleAction.COMBINE
        assert recommend_action(34, rule) is BottleAction.DISCARD

    def test_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError):
            recommend_action(101)
        with pytest.raises(ValueError):
            recommend_action(-1)

    def test_rule_validation(self) -> None:
        with pytest.raises(ValueError, match="cannot exceed"):
            AirlineRule(airline="X", reuse_threshold=30, combine_threshold=50)

    def test_record_bottle_check(self) -> None:
        analysis = record_bottle_check("f1", 85, bottle_type="Wine - Red")
        assert analysis.recommended_action is BottleAction.REUSE
        assert analysis.flight_id == "f1"
        assert "85%" in analysis.ai_analysis


class TestDashboardMetrics:
    """Tests for compute_dashboard_metrics."""

    def test_empty(self) -> None:
        m = compute_dashboard_metrics([], [], [])
        assert m.total_flights == 0
        assert m.average_reliability == 0
        assert m.employee_efficiency == 100
        assert m.trolley_error_rate == 0

    def test_aggregates(self) -> None:
        flights = [
            make_flight("AM1", status="delayed", meals=160),
            make_flight("AM2", status="cancelled", meals=40),
            make_flight("AM3", meals=500),
        ]
        flights[0].reliability = 80
        flights[1].reliability = 40
        analyses = [
            BottleAnalysis(flight_id=None, fill_level=90, recommended_action="reuse"),
            BottleAnalysis(flight_id=None, fill_level=50, recommended_action="combine"),
            BottleAnalysis(flight_id=None, fill_level=10, recommended_action="discard"),
            BottleAnalysis(flight_id=None, fill_level=80, recommended_action="reuse"),
        ]
        verifications = [
            TrolleyVerification(flight_id=None, has_errors=True, errors=["missing can"]),
            TrolleyVerification(flight_id=None),
        ]

        m = compute_dashboard_metrics(flights, analyses, verifications)

        assert m.total_flights == 3
        assert m.average_reliability == pytest.approx(60)
        assert m.food_saved == 200
        assert (m.bottles_reused, m.bottles_combined, m.bottles_discarded) == (2, 1, 1)
        assert m.employee_efficiency == pytest.approx(75)
        assert m.trolley_error_rate == pytest.approx(50)
        df = m.bottle_dataframe()
        assert df.set_index("action").loc["reuse", "count"] == 2


class TestEmployeeMetric:
    """Tests for EmployeeMetric and the employee table."""

    def test_rating(self) -> None:
        excellent = EmployeeMetric("Maria Garcia", 12.5, 2.1, 97.9, 45)
        high_errors = EmployeeMetric("John Smith", 14.2, 3.5, 96.5, 38)
        low_compliance = EmployeeMetric("Ana Ruiz", 10.0, 1.0, 95.0, 20)
        assert excellent.rating == "Excellent"
        assert high_errors.rating == "Good"
        assert low_compliance.rating == "Good"

    def test_validation(self) -> None:
        with pytest.raises(ValueError, match="employee_name"):
            EmployeeMetric(" ", 12.5, 2.1, 97.9, 45)
        with pytest.raises(ValueError, match="error_rate"):
            EmployeeMetric("Lisa Chen", 13.1, 120, 97.3, 41)
        with pytest.raises(ValueError, match="trolleys_processed"):
            EmployeeMetric("Lisa Chen", 13.1, 2.7, 97.3, -1)

    def test_dataframe(self) -> None:
        df = employees_dataframe(
            [
                EmployeeMetric("Maria Garcia", 12.5, 2.1, 97.9, 45),
                EmployeeMetric("John Smith", 14.2, 3.5, 96.5, 38),
            ]
        )
        assert list(df["rating"]) == ["Excellent", "Good"]
        assert df["trolleys_processed"].sum() == 83

    def test_empty_dataframe_keeps_columns(self) -> None:
        df = employees_dataframe([])
        assert df.empty
        assert "compliance_rate" in df.columns
