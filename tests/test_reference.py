"""Unit tests for airline code derivation and status parsing."""

import json

import pytest

from galleyops.config import get_settings
from galleyops.exceptions import InvalidFlightError
from galleyops.reference import (
    FlightStatus,
    code_for_airline,
    extract_airline_code,
    is_disrupted,
    load_airline_codes,
    normalize_codes,
    parse_flight_status,
    reset_airline_codes,
)


class TestExtractAirlineCode:
    """Tests for extract_airline_code."""

    def test_two_letter_prefix(self) -> None:
        assert extract_airline_code("AM651", "AeroMexico") == "AM"
        assert extract_airline_code("UA1234", "United") == "UA"

    def test_three_letter_prefix(self) -> None:
        assert extract_airline_code("AAL100", "American Airlines") == "AAL"

    def test_prefix_wins_over_name(self) -> None:
        """The flight number prefix is used even when the name maps elsewhere."""
        assert extract_airline_code("XY12", "Delta") == "XY"

    def test_lowercase_flight_number_falls_back_to_table(self) -> None:
        assert extract_airline_code("am651", "AeroMexico") == "AM"

    def test_numeric_flight_number_uses_table(self) -> None:
        assert extract_airline_code("1234", "Delta") == "DL"
        assert extract_airline_code("", "American Airlines") == "AA"

    def test_table_lookup_ignores_case_and_spacing(self) -> None:
        assert extract_airline_code("789", "  american   airlines ") == "AA"

    def test_unknown_airline_uses_first_two_letters(self) -> None:
        assert extract_airline_code("123", "zephyr air") == "ZE"

    def test_single_letter_prefix_is_not_a_code(self) -> None:
        assert extract_airline_code("A123", "zephyr air") == "ZE"

    def test_empty_inputs_give_empty_code(self) -> None:
        assert extract_airline_code("", "") == ""
        assert extract_airline_code(None, None) == ""

    def test_explicit_table(self) -> None:
        codes = {"zephyr air": "ZP"}
        assert extract_airline_code("123", "Zephyr Air", codes) == "ZP"

    def test_explicit_table_keys_normalized(self) -> None:
        codes = {"Zephyr Air": "ZP", "  Blue   Sky ": "BS"}
        assert extract_airline_code("123", "Zephyr Air", codes) == "ZP"
        assert extract_airline_code("123", "zephyr  air", codes) == "ZP"
        assert code_for_airline("BLUE SKY", codes) == "BS"

    def test_normalize_codes(self) -> None:
        assert normalize_codes({" Zephyr  AIR ": "ZP"}) == {"zephyr air": "ZP"}


class TestAirlineCodeTable:
    """Tests for the name->code table."""

    def test_shipped_entries(self) -> None:
        codes = load_airline_codes()
        assert codes["aeromexico"] == "AM"
        assert codes["delta"] == "DL"
        assert codes["united"] == "UA"

    def test_extra_file_overrides_shipped(self, tmp_path) -> None:
        extra = tmp_path / "codes.json"
        extra.write_text(json.dumps({"Delta": "dl", "Zephyr Air": "ZP"}), encoding="utf-8")
        codes = load_airline_codes(str(extra))
        assert codes["delta"] == "DL"
        assert codes["zephyr air"] == "ZP"
        assert codes["aeromexico"] == "AM"

    def test_extra_file_must_be_object(self, tmp_path) -> None:
        extra = tmp_path / "codes.json"
        extra.write_text(json.dumps(["Delta", "DL"]), encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            load_airline_codes(str(extra))

    def test_settings_path_picked_up_after_reset(self, tmp_path, monkeypatch) -> None:
        extra = tmp_path / "codes.json"
        extra.write_text(json.dumps({"Zephyr Air": "ZP"}), encoding="utf-8")
        monkeypatch.setenv("GALLEYOPS_AIRLINE_CODES_PATH", str(extra))
        get_settings.cache_clear()
        reset_airline_codes()
        try:
            assert code_for_airline("Zephyr Air") == "ZP"
            assert extract_airline_code("123", "zephyr air") == "ZP"
        finally:
            monkeypatch.delenv("GALLEYOPS_AIRLINE_CODES_PATH")
            get_settings.cache_clear()
            reset_airline_codes()

    def test_code_for_airline_unknown_returns_none(self) -> None:
        assert code_for_airline("Nonexistent Airways") is None
        assert code_for_airline("") is None


class TestParseFlightStatus:
    """Tests for parse_flight_status."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("scheduled", FlightStatus.SCHEDULED),
            ("Delayed", FlightStatus.DELAYED),
            (" CANCELLED ", FlightStatus.CANCELLED),
            ("canceled", FlightStatus.CANCELLED),
            ("reassigned", FlightStatus.REASSIGNED),
            ("On Time", FlightStatus.SCHEDULED),
        ],
    )
    def test_known_values(self, raw, expected) -> None:
        assert parse_flight_status(raw) is expected

    def test_enum_passthrough(self) -> None:
        assert parse_flight_status(FlightStatus.DELAYED) is FlightStatus.DELAYED

    def test_unknown_raises(self) -> None:
        with pytest.raises(InvalidFlightError, match="Unknown flight status"):
            parse_flight_status("boarding")

    def test_empty_raises(self) -> None:
        with pytest.raises(InvalidFlightError):
            parse_flight_status("")
        with pytest.raises(InvalidFlightError):
            parse_flight_status(None)

    def test_is_disrupted(self) -> None:
        assert is_disrupted(FlightStatus.DELAYED)
        assert is_disrupted(FlightStatus.CANCELLED)
        assert not is_disrupted(FlightStatus.SCHEDULED)
        assert not is_disrupted(FlightStatus.REASSIGNED)
