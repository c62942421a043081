"""
Command-line interface for the VATSIM Status File Parser.
Prints a summary of a status file, its faults or the whole content as JSON.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

from ..core.summary import StatusSummary
from ..config.constants import APP_NAME, APP_VERSION
from ..config.settings import settings
from ..data.network_info import NetworkInformation, NetworkInformationParser
from ..data.models import ParsedDocument
from ..data.parser import DataFileParser
from ..data.privacy_filter import PrivacyFilter
from ..io.files import read_status_file, get_file_info

# Configure logger
logger = logging.getLogger("vatsim_status.ui.cli")


class CLI:
    """
    Command-line interface for the VATSIM Status File Parser.
    Output goes to the given stream, logging to stderr.
    """

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out or sys.stdout
        self.parser = DataFileParser(settings.supported_format_versions())

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def run(self,
            path: str,
            encoding: Optional[str] = None,
            network_info: bool = False,
            as_json: bool = False,
            show_faults: Optional[bool] = None,
            privacy_filter: Optional[PrivacyFilter] = None) -> int:
        """
        Read and evaluate a file.

        Args:
            path: Status file (or network information file)
            encoding: Character encoding of the file (default: from settings)
            network_info: Treat the file as network information (status.txt)
            as_json: Print JSON instead of a text summary
            show_faults: List all faults (default: from settings)
            privacy_filter: Write the file filtered through this filter instead
                            of evaluating it

        Returns:
            int: Exit code
        """
        try:
            content = read_status_file(path, encoding)
        except (OSError, LookupError) as e:
            logger.error(f"Unable to read {path}: {e}")
            return 1

        if privacy_filter is not None:
            return self._write_filtered(content, privacy_filter)

        if network_info:
            info = NetworkInformationParser().parse(content)
            self._print_network_information(info, as_json)
            return 0

        document = self.parser.parse(content)

        if show_faults is None:
            show_faults = settings.get('show_faults', False)

        if as_json:
            self._print(json.dumps(self._document_to_dict(document, show_faults), indent=2))
        else:
            self._print_summary(path, document)
            if show_faults:
                self._print_faults(document)

        return 0

    def _write_filtered(self, content: str, privacy_filter: PrivacyFilter) -> int:
        filtered = privacy_filter.filter(content)

        if not privacy_filter.verify(content, filtered, self.parser):
            logger.error("Filtered file does not parse to the expected content, nothing written")
            return 2

        self.out.write(filtered)
        return 0

    def _document_to_dict(self, document: ParsedDocument, show_faults: bool) -> Dict[str, Any]:
        result = {
            'metadata': document.metadata.to_dict(),
            'summary': StatusSummary(document).to_dict(),
            'clients': [record.to_dict() for record in document.client_records],
            'servers': [server.to_dict() for server in document.server_records],
            'voice_servers': [server.to_dict() for server in document.voice_server_records],
        }
        if show_faults:
            result['faults'] = [str(fault) for fault in document.faults]
        return result

    def _print_summary(self, path: str, document: ParsedDocument) -> None:
        summary = StatusSummary(document)
        file_info = get_file_info(path)

        self._print(f"\n===== {APP_NAME} v{APP_VERSION} =====\n")
        self._print(f"File: {file_info.get('filename', path)} ({file_info.get('size_str', 'unknown size')})")

        metadata = document.metadata
        if metadata.timestamp:
            self._print(f"Updated: {metadata.timestamp.isoformat()}")
        if metadata.version_format >= 0:
            self._print(f"Format version: {metadata.version_format}")

        self._print(f"\nClients: {summary.total_clients} ({summary.online_clients} online)")
        for role, count in summary.clients_by_role.items():
            if count:
                self._print(f"  {role}: {count}")
        if summary.reclassified_clients:
            self._print(f"  reclassified by heuristic: {summary.reclassified_clients}")

        if summary.atc_by_facility_type:
            self._print("\nATC stations:")
            for facility_type, count in sorted(summary.atc_by_facility_type.items()):
                self._print(f"  {facility_type}: {count}")

        if summary.top_departure_airports:
            self._print("\nTop departures:")
            for airport, count in summary.top_departure_airports:
                self._print(f"  {airport}: {count}")

        if summary.top_destination_airports:
            self._print("\nTop destinations:")
            for airport, count in summary.top_destination_airports:
                self._print(f"  {airport}: {count}")

        self._print(f"\nServers: {len(document.server_records)}, voice servers: {len(document.voice_server_records)}")
        self._print(f"Faults: {summary.fatal_faults} fatal, {summary.advisory_faults} advisory")

    def _print_faults(self, document: ParsedDocument) -> None:
        if not document.faults:
            return

        self._print("\nFaults:")
        for i, fault in enumerate(document.faults):
            self._print(f"{i+1}: {fault}")

    def _print_network_information(self, info: NetworkInformation, as_json: bool) -> None:
        if as_json:
            self._print(json.dumps(info.to_dict(), indent=2))
            return

        self._print(f"WhazzUp: {info.whazzup_string or '-'}")
        for message in info.startup_messages:
            self._print(f"Message: {message}")
        for url in info.data_file_urls:
            self._print(f"Data file: {url}")
        for url in info.servers_file_urls:
            self._print(f"Servers file: {url}")
        for url in info.moved_to_urls:
            self._print(f"Moved to: {url}")


def create_cli(out: Optional[TextIO] = None) -> CLI:
    """
    Create a CLI instance.

    Returns:
        CLI: New CLI instance
    """
    return CLI(out)
