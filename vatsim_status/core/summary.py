"""
Statistics over a parsed status file.
"""

import logging
from collections import Counter
from typing import Dict, Any, List, Optional, Tuple

from ..data.models import ClientRole, ParsedDocument
from ..config.settings import settings

# Configure logger
logger = logging.getLogger("vatsim_status.core.summary")


class StatusSummary:
    """
    Aggregated view of a ParsedDocument: who is online, where flights go
    and how many lines had to be dropped.
    """

    def __init__(self, document: ParsedDocument, top_airports: Optional[int] = None):
        """
        Args:
            document: Parsed status file
            top_airports: Number of airports to list (default: from settings)
        """
        self.document = document
        self.top_airports = top_airports if top_airports is not None else settings.get('top_airports', 5)

        records = document.client_records

        self.clients_by_role: Dict[str, int] = {role.name: 0 for role in ClientRole}
        self.clients_by_role.update(Counter(record.effective_role.name for record in records))

        self.reclassified_clients = sum(1 for record in records if record.is_role_reclassified)

        self.atc_by_facility_type: Dict[str, int] = dict(Counter(
            record.facility_type.short_name
            for record in records
            if record.effective_role == ClientRole.ATC_CONNECTED and record.facility_type is not None
        ))

        self._departures = Counter(
            record.filed_departure_airport_code for record in records if record.filed_departure_airport_code
        )
        self._destinations = Counter(
            record.filed_destination_airport_code for record in records if record.filed_destination_airport_code
        )

        self.fatal_faults = len(document.fatal_faults)
        self.advisory_faults = len(document.advisory_faults)

        logger.debug(f"Summarized {len(records)} client records")

    @property
    def total_clients(self) -> int:
        return len(self.document.client_records)

    @property
    def online_clients(self) -> int:
        return sum(1 for record in self.document.client_records if record.effective_role.is_online)

    @property
    def top_departure_airports(self) -> List[Tuple[str, int]]:
        return self._departures.most_common(self.top_airports)

    @property
    def top_destination_airports(self) -> List[Tuple[str, int]]:
        return self._destinations.most_common(self.top_airports)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the summary to a dictionary"""
        metadata = self.document.metadata
        return {
            'format_version': metadata.version_format if metadata.version_format >= 0 else None,
            'timestamp': metadata.timestamp.isoformat() if metadata.timestamp else None,
            'total_clients': self.total_clients,
            'online_clients': self.online_clients,
            'clients_by_role': dict(self.clients_by_role),
            'reclassified_clients': self.reclassified_clients,
            'atc_by_facility_type': dict(self.atc_by_facility_type),
            'servers': len(self.document.server_records),
            'voice_servers': len(self.document.voice_server_records),
            'top_departure_airports': [list(entry) for entry in self.top_departure_airports],
            'top_destination_airports': [list(entry) for entry in self.top_destination_airports],
            'fatal_faults': self.fatal_faults,
            'advisory_faults': self.advisory_faults,
        }
