"""
Tests for the command-line interface.
"""

import pytest
import io
import json
import main
from vatsim_status.data.privacy_filter import PrivacyFilter
from vatsim_status.ui.cli import CLI


class TestCLI:
    """Test cases for CLI."""

    @pytest.fixture
    def data_file(self, tmp_path, sample_data_file):
        """Write the sample data file in its original encoding."""
        path = tmp_path / "vatsim-data.txt"
        path.write_bytes(sample_data_file.encode("iso-8859-1"))
        return path

    @pytest.fixture
    def out(self):
        """Capture CLI output."""
        return io.StringIO()

    def test_text_summary(self, data_file, out):
        """Test the default text output."""
        exit_code = CLI(out).run(str(data_file), encoding="iso-8859-1")

        output = out.getvalue()
        assert exit_code == 0
        assert "Clients: 3 (2 online)" in output
        assert "TWR: 1" in output
        assert "Faults: 0 fatal, 0 advisory" in output

    def test_json_output(self, data_file, out):
        """Test the JSON output."""
        exit_code = CLI(out).run(str(data_file), encoding="iso-8859-1", as_json=True, show_faults=True)

        result = json.loads(out.getvalue())
        assert exit_code == 0
        assert result['metadata']['version_format'] == 8
        assert [client['callsign'] for client in result['clients']] == ["DLH123", "EDDF_TWR", "AAL100"]
        assert result['clients'][1]['controller_message'] == "Frankfurt Tower\nWelcome"
        assert result['faults'] == []

    def test_faults_are_listed(self, tmp_path, out, pilot_line):
        """Test listing of faults."""
        path = tmp_path / "broken.txt"
        path.write_text("!GENERAL:\nVERSION = 8\n!CLIENTS:\n" + pilot_line() + "\nbroken\n", encoding="iso-8859-1")

        CLI(out).run(str(path), encoding="iso-8859-1", show_faults=True)

        assert "1: [FATAL]" in out.getvalue()
        assert "broken" in out.getvalue()

    def test_missing_file(self, tmp_path, out):
        """Test that unreadable files result in an error exit code."""
        assert CLI(out).run(str(tmp_path / "missing.txt")) == 1

    def test_unknown_encoding(self, data_file, out):
        """Test that unknown encodings result in an error exit code."""
        assert CLI(out).run(str(data_file), encoding="no-such-encoding") == 1

    def test_network_information(self, tmp_path, out, sample_network_information):
        """Test parsing network information files."""
        path = tmp_path / "status.txt"
        path.write_text(sample_network_information, encoding="iso-8859-1")

        exit_code = CLI(out).run(str(path), network_info=True, as_json=True)

        result = json.loads(out.getvalue())
        assert exit_code == 0
        assert result['whazzup_string'] == "120128:NOTCP"
        assert len(result['data_urls']['_legacy']) == 2

    def test_anonymize(self, data_file, out, sample_data_file):
        """Test writing a filtered file instead of a summary."""
        exit_code = CLI(out).run(str(data_file), encoding="iso-8859-1", privacy_filter=PrivacyFilter())

        assert exit_code == 0
        assert out.getvalue() == PrivacyFilter().filter(sample_data_file)
        assert "Jane Doe" not in out.getvalue()

    def test_anonymize_refuses_unverified_output(self, data_file, out, monkeypatch):
        """Test that nothing is written if the filtered file fails verification."""
        monkeypatch.setattr(PrivacyFilter, "verify", lambda self, original, filtered, parser=None: False)

        exit_code = CLI(out).run(str(data_file), encoding="iso-8859-1", privacy_filter=PrivacyFilter())

        assert exit_code == 2
        assert out.getvalue() == ""


class TestMain:
    """Test cases for the entry point."""

    def test_parse_args(self):
        """Test command line arguments."""
        args = main.parse_args(["data.txt", "--json", "--encoding", "utf-8"])

        assert args.path == "data.txt"
        assert args.json is True
        assert args.encoding == "utf-8"
        assert args.faults is None
        assert args.network_info is False
        assert args.anonymize is False

    def test_main(self, tmp_path, capsys, sample_data_file):
        """Test running the entry point."""
        path = tmp_path / "vatsim-data.txt"
        path.write_text(sample_data_file, encoding="iso-8859-1")

        exit_code = main.main([str(path), "--json"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)['summary']['total_clients'] == 3

    def test_main_anonymize(self, tmp_path, capsys, sample_data_file):
        """Test the anonymize options of the entry point."""
        path = tmp_path / "vatsim-data.txt"
        path.write_text(sample_data_file, encoding="iso-8859-1")

        exit_code = main.main([str(path), "--anonymize", "--strip-remarks", "--hide-observers"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "Jane Doe" not in output
        assert ":/V/:ANEKI Y163 NATOR:" in output

    def test_main_missing_file(self, tmp_path):
        """Test the exit code for missing files."""
        assert main.main([str(tmp_path / "missing.txt")]) == 1
