import csv
import logging
from typing import List

from ..core.endpoint import RECORD_TYPE_A, SUPPORTED_RECORD_TYPES, Endpoint
from ..utils.validators import normalize_fqdn, validate_fqdn, validate_ipv4
from .base_source import Source

logger = logging.getLogger(__name__)


class CSVSource(Source):
    """Reads desired endpoints from a CSV file with FQDN and Target columns."""

    def __init__(self, csv_path: str):
        self.csv_path = csv_path

    def endpoints(self) -> List[Endpoint]:
        """Parse CSV file and validate records."""
        endpoints = []

        try:
            with open(self.csv_path, "r", newline="") as f:
                reader = csv.DictReader(f)
                fieldnames = reader.fieldnames or []

                if "FQDN" not in fieldnames:
                    raise ValueError("CSV must contain an 'FQDN' column")

                # IPv4 is accepted for files written for A records only
                target_column = "Target" if "Target" in fieldnames else "IPv4"
                if target_column not in fieldnames:
                    raise ValueError("CSV must contain a 'Target' or 'IPv4' column")

                for row_num, row in enumerate(reader, start=2):
                    endpoint = self._parse_row(row, target_column, row_num)
                    if endpoint is not None:
                        endpoints.append(endpoint)

            logger.info(f"Successfully parsed {len(endpoints)} records from CSV")

        except FileNotFoundError:
            raise FileNotFoundError(f"CSV file not found: {self.csv_path}")

        return endpoints

    def _parse_row(self, row, target_column: str, row_num: int):
        fqdn = normalize_fqdn(row.get("FQDN") or "")
        target = (row.get(target_column) or "").strip()
        record_type = (row.get("Type") or RECORD_TYPE_A).strip().upper()
        ttl_value = (row.get("TTL") or "").strip()

        if not validate_fqdn(fqdn):
            logger.warning(f"Invalid FQDN '{fqdn}' at row {row_num}, skipping")
            return None

        if record_type not in SUPPORTED_RECORD_TYPES:
            logger.warning(
                f"Unsupported record type '{record_type}' at row {row_num}, skipping"
            )
            return None

        if not target:
            logger.warning(f"Empty target at row {row_num}, skipping")
            return None

        if record_type == RECORD_TYPE_A and not validate_ipv4(target):
            logger.warning(f"Invalid IPv4 '{target}' at row {row_num}, skipping")
            return None

        ttl = None
        if ttl_value:
            try:
                ttl = int(ttl_value)
            except ValueError:
                logger.warning(f"Invalid TTL '{ttl_value}' at row {row_num}, skipping")
                return None

        return Endpoint(name=fqdn, target=target, record_type=record_type, ttl=ttl)
