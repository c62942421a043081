"""
Tests for the client line grammar.
"""

import pytest
from vatsim_status.config.constants import CLIENT_RECORD_FIELD_COUNT
from vatsim_status.data.grammar import ClientField, LineGrammar, grammar


class TestLineGrammar:
    """Test cases for LineGrammar."""

    def test_field_count(self):
        """Test that every field of a record is addressable."""
        assert len(ClientField) == CLIENT_RECORD_FIELD_COUNT
        assert [field.value for field in ClientField] == list(range(1, CLIENT_RECORD_FIELD_COUNT + 1))

    def test_match_pilot(self, pilot_line):
        """Test tokenizing a pilot line."""
        fields = grammar.match(pilot_line())

        assert fields is not None
        assert fields[ClientField.CALLSIGN] == "DLH123"
        assert fields[ClientField.CLIENT_TYPE] == "PILOT"
        assert fields[ClientField.QNH_HECTOPASCAL] == "1013"
        assert fields[ClientField.FREQUENCY] == ""

    def test_match_keeps_colons_in_controller_message(self, atc_line):
        """Test that only the controller message may contain colons."""
        fields = LineGrammar().match(atc_line(ATIS_MESSAGE="a:b:c"))

        assert fields[ClientField.ATIS_MESSAGE] == "a:b:c"
        assert fields[ClientField.TIME_LOGON] == "20190101100000"

    def test_is_zero_or_empty(self, atc_line):
        """Test the zero-or-empty check."""
        fields = grammar.match(atc_line())

        assert fields.is_zero_or_empty(ClientField.GROUND_SPEED)
        assert fields.is_zero_or_empty(ClientField.HEADING)
        assert not fields.is_zero_or_empty(ClientField.VISUAL_RANGE)

    @pytest.mark.parametrize("overrides", [
        {"CLIENT_TYPE": "pilot"},
        {"MEMBER_ID": "abc"},
        {"LATITUDE": "north"},
        {"TIME_LOGON": "2019"},
        {"HEADING": "-5"},
    ])
    def test_no_match(self, pilot_line, overrides):
        """Test that lines violating the field syntax do not match."""
        assert grammar.match(pilot_line(**overrides)) is None

    def test_no_match_without_trailing_colon(self, pilot_line):
        """Test that the last field must be terminated."""
        assert grammar.match(pilot_line()[:-1]) is None
