"""
Tests for network information parsing.
"""

import pytest
import logging
from vatsim_status.data.network_info import (
    NetworkInformation, NetworkInformationParser, DATA_KEY_LEGACY, DATA_KEY_JSON3, is_valid_url
)


class TestNetworkInformationParser:
    """Test cases for NetworkInformationParser."""

    @pytest.fixture
    def info(self, sample_network_information):
        """Parse the sample network information."""
        return NetworkInformationParser().parse(sample_network_information)

    def test_whazzup_string(self, info):
        """Test that the first content line is recorded as WhazzUp string."""
        assert info.whazzup_string == "120128:NOTCP"

    def test_startup_messages(self, info):
        """Test startup messages."""
        assert info.startup_messages == ["Welcome to the network"]

    def test_data_file_urls(self, info):
        """Test data file URLs by format."""
        assert info.data_file_urls == [
            "http://example.com/vatsim-data.txt",
            "http://example.org/vatsim-data.txt",
        ]
        assert info.get_data_urls(DATA_KEY_JSON3) == ["https://data.example.com/v3/vatsim-data.json"]
        assert set(info.all_urls_by_data_key) == {DATA_KEY_LEGACY, DATA_KEY_JSON3}

    def test_parameter_urls(self, info):
        """Test URLs of the other services."""
        assert info.servers_file_urls == ["http://example.com/vatsim-servers.txt"]
        assert info.metar_urls == ["http://metar.example.com/metar.php"]
        assert info.atis_urls == ["http://example.com/atis"]
        assert info.user_statistics_urls == ["http://example.com/stats"]
        assert info.moved_to_urls == ["http://example.com/status.txt"]

    def test_whazzup_only_on_first_content_line(self):
        """Test that a WhazzUp-like line later in the file is not recorded."""
        info = NetworkInformationParser().parse("msg0=hello\n120128:NOTCP\n")

        assert info.whazzup_string is None

    def test_malformed_url_is_skipped(self, caplog):
        """Test that malformed URLs are logged and skipped."""
        with caplog.at_level(logging.WARNING, logger="vatsim_status.network_info"):
            info = NetworkInformationParser().parse("url1=not a url\nurl1=http://example.com/servers\n")

        assert info.servers_file_urls == ["http://example.com/servers"]
        assert "malformed" in caplog.text

    def test_unknown_key_is_logged(self, caplog):
        """Test that unknown keys are reported."""
        with caplog.at_level(logging.WARNING, logger="vatsim_status.network_info"):
            NetworkInformationParser().parse("something=else\nvoice0=ignored\n")

        assert "Unrecognized key \"something\"" in caplog.text
        assert "voice0" not in caplog.text

    def test_definition_mismatch_is_logged(self, caplog):
        """Test that changed parameter descriptions are reported."""
        with caplog.at_level(logging.WARNING, logger="vatsim_status.network_info"):
            NetworkInformationParser().parse("; url0 - something entirely different\n")

        assert "Mismatch in definition comment for key \"url0\"" in caplog.text

    def test_parse_line_iterable(self):
        """Test parsing from a list of lines."""
        info = NetworkInformationParser().parse(["120128:NOTCP\n", "msg0=hi\n"])

        assert info.whazzup_string == "120128:NOTCP"
        assert info.startup_messages == ["hi"]


class TestNetworkInformation:
    """Test cases for NetworkInformation."""

    def test_add_as_url(self):
        """Test adding valid and invalid URLs."""
        info = NetworkInformation()

        assert info.add_as_url("url1", "http://example.com/")
        assert not info.add_as_url("url1", "example.com")
        assert info.servers_file_urls == ["http://example.com/"]

    def test_add_all(self):
        """Test merging without duplicates."""
        first = NetworkInformation()
        first.whazzup_string = "1:A"
        first.add_startup_message("hello")
        first.add_as_data_url(DATA_KEY_LEGACY, "http://a.example.com/")

        second = NetworkInformation()
        second.whazzup_string = "2:B"
        second.add_startup_message("hello")
        second.add_startup_message("world")
        second.add_as_data_url(DATA_KEY_LEGACY, "http://a.example.com/")
        second.add_as_data_url(DATA_KEY_LEGACY, "http://b.example.com/")
        second.add_as_url("atis0", "http://atis.example.com/")

        result = first.add_all(second)

        assert result is first
        assert first.whazzup_string == "1:A"
        assert first.startup_messages == ["hello", "world"]
        assert first.data_file_urls == ["http://a.example.com/", "http://b.example.com/"]
        assert first.atis_urls == ["http://atis.example.com/"]

    def test_add_all_takes_missing_whazzup(self):
        """Test that a missing WhazzUp string is taken from the other instance."""
        first = NetworkInformation()
        second = NetworkInformation()
        second.whazzup_string = "2:B"

        assert first.add_all(second).whazzup_string == "2:B"

    def test_to_dict(self):
        """Test conversion to dictionary."""
        info = NetworkInformation()
        info.add_as_url("url1", "http://example.com/")

        assert info.to_dict()["urls"] == {"url1": ["http://example.com/"]}

    @pytest.mark.parametrize("value, expected", [
        ("http://example.com/", True),
        ("https://example.com/path?id=1", True),
        ("file:///tmp/status.txt", True),
        ("example.com", False),
        ("", False),
        ("not a url", False),
    ])
    def test_is_valid_url(self, value, expected):
        """Test URL validation."""
        assert is_valid_url(value) is expected
