"""Unit tests for the compatibility resolver."""

from datetime import timedelta

from galleyops.replanning.resolver import compatible_flights, find_target_flight

from helpers import make_flight


def _delayed(now, **kwargs):
    kwargs.setdefault("flight_number", "AM245")
    kwargs.setdefault("status", "delayed")
    return make_flight(now=now, **kwargs)


class TestFindTargetFlight:
    """Tests for find_target_flight."""

    def test_picks_earliest_departure(self, now) -> None:
        source = _delayed(now)
        later = make_flight("AM892", departs_in=timedelta(hours=5), now=now)
        sooner = make_flight("AM651", departs_in=timedelta(hours=2), now=now)
        flights = [source, later, sooner]

        assert find_target_flight(source, flights, now) is sooner

    def test_no_candidates_returns_none(self, now) -> None:
        source = _delayed(now, flight_number="DL321", airline="Delta")
        flights = [source, make_flight("AM651", now=now)]

        assert find_target_flight(source, flights, now) is None

    def test_excludes_itself(self, now) -> None:
        # A disrupted flight never matches itself even if its status looks eligible
        source = make_flight("AM651", status="scheduled", now=now)
        assert find_target_flight(source, [source], now) is None

    def test_only_scheduled_flights_qualify(self, now) -> None:
        source = _delayed(now)
        flights = [
            source,
            make_flight("AM100", status="delayed", now=now),
            make_flight("AM101", status="cancelled", now=now),
            make_flight("AM102", status="reassigned", now=now),
        ]
        assert find_target_flight(source, flights, now) is None

    def test_departure_exactly_now_excluded(self, now) -> None:
        source = _delayed(now)
        at_now = make_flight("AM651", departs_in=timedelta(0), now=now)
        assert find_target_flight(source, [source, at_now], now) is None

    def test_departure_just_after_now_included(self, now) -> None:
        source = _delayed(now)
        soon = make_flight("AM651", departs_in=timedelta(seconds=1), now=now)
        assert find_target_flight(source, [source, soon], now) is soon

    def test_departure_at_window_end_included(self, now) -> None:
        source = _delayed(now)
        edge = make_flight("AM651", departs_in=timedelta(hours=6), now=now)
        assert find_target_flight(source, [source, edge], now) is edge

    def test_departure_past_window_excluded(self, now) -> None:
        source = _delayed(now)
        late = make_flight("AM651", departs_in=timedelta(hours=6, seconds=1), now=now)
        seven = make_flight("AM652", departs_in=timedelta(hours=7), now=now)
        assert find_target_flight(source, [source, late, seven], now) is None

    def test_departed_flights_excluded(self, now) -> None:
        source = _delayed(now)
        gone = make_flight("AM651", departs_in=timedelta(hours=-1), now=now)
        assert find_target_flight(source, [source, gone], now) is None

    def test_custom_window(self, now) -> None:
        source = _delayed(now)
        seven = make_flight("AM651", departs_in=timedelta(hours=7), now=now)
        assert find_target_flight(source, [source, seven], now, window=timedelta(hours=8)) is seven

    def test_same_name_different_code_not_matched(self, now) -> None:
        """Identical airline names do not match when derived codes differ."""
        source = _delayed(now, flight_number="AM245", airline="AeroMexico")
        # Malformed flight number whose prefix is not the airline's code
        other = make_flight("XAM651", airline="AeroMexico", now=now)
        assert find_target_flight(source, [source, other], now) is None

    def test_different_names_same_code_matched(self, now) -> None:
        """Different airline names match when their derived codes coincide."""
        source = _delayed(now, flight_number="AM245", airline="AeroMexico")
        other = make_flight("AM777", airline="Amazing Air", now=now)
        assert find_target_flight(source, [source, other], now) is other

    def test_name_fallback_matches_prefixed_flight(self, now) -> None:
        source = _delayed(now, flight_number="245", airline="AeroMexico")
        other = make_flight("AM651", airline="AeroMexico", now=now)
        assert find_target_flight(source, [source, other], now) is other

    def test_tie_broken_by_flight_number(self, now) -> None:
        source = _delayed(now)
        b = make_flight("AM900", departs_in=timedelta(hours=2), now=now)
        a = make_flight("AM100", departs_in=timedelta(hours=2), now=now)
        assert find_target_flight(source, [source, b, a], now) is a
        assert find_target_flight(source, [source, a, b], now) is a

    def test_tie_on_flight_number_broken_by_id(self, now) -> None:
        source = _delayed(now)
        second = make_flight("AM100", now=now, flight_id="b")
        first = make_flight("AM100", now=now, flight_id="a")
        assert find_target_flight(source, [source, second, first], now) is first

    def test_empty_code_never_matches(self, now) -> None:
        source = _delayed(now, flight_number="", airline="")
        other = make_flight("", airline="", now=now)
        assert find_target_flight(source, [source, other], now) is None


class TestCompatibleFlights:
    """Tests for compatible_flights ordering."""

    def test_ordered_by_departure(self, now) -> None:
        source = _delayed(now)
        flights = [
            source,
            make_flight("AM3", departs_in=timedelta(hours=5), now=now),
            make_flight("AM1", departs_in=timedelta(hours=1), now=now),
            make_flight("AM2", departs_in=timedelta(hours=3), now=now),
            make_flight("UA1", airline="United", departs_in=timedelta(hours=2), now=now),
        ]
        result = compatible_flights(source, flights, now)
        assert [f.flight_number for f in result] == ["AM1", "AM2", "AM3"]
