"""
Data export utilities for Mailbox Crawler.

Writes the final enriched records to CSV.
"""

import csv
from pathlib import Path
from typing import List

from mailbox_crawler.models import Record
from mailbox_crawler.models.enrichment import RECORD_FIELDS
from mailbox_crawler.utils.logging import get_logger

logger = get_logger()


class DataExporter:
    """Exports enriched records."""

    def __init__(self, output_file: Path):
        """
        Initialize data exporter.

        Args:
            output_file: Destination CSV path; its directory is created on export
        """
        self.output_file = Path(output_file)

    def export_records(self, records: List[Record]) -> Path:
        """Sort records by (CMRA, RDI) and write them to CSV."""
        sorted_records = sorted(records, key=lambda r: r.sort_key())

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_file, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=RECORD_FIELDS)
            writer.writeheader()
            for record in sorted_records:
                writer.writerow(record.to_row())

        logger.info(f"Saved {len(sorted_records)} records to {self.output_file}")
        return self.output_file
