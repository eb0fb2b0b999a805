"""Scan discovery operation."""

from datetime import datetime, timedelta, timezone

from cxone_reader.operations.base import Operation
from cxone_reader.operations.project_discovery import split_csv
from cxone_reader.models.scan import Scan, SCAN_STATUSES


def validate_days_back(days_back, max_days_back=366):
    """Check a days-back filter.

    Args:
        days_back (int): 0 for all history, otherwise 1..max_days_back
        max_days_back (int): Upper bound

    Raises:
        ValueError: If the value is out of range
    """
    if isinstance(days_back, bool) or not isinstance(days_back, int):
        raise ValueError("Days back must be an integer")
    if days_back != 0 and not 1 <= days_back <= max_days_back:
        raise ValueError(f"Days back must be between 1 and {max_days_back}, or 0 for all history")


def from_date(days_back, now=None):
    """ISO-8601 UTC timestamp ``days_back`` days before now."""
    now = now or datetime.now(timezone.utc)
    return (now - timedelta(days=days_back)).strftime('%Y-%m-%dT%H:%M:%SZ')


class ScanDiscovery(Operation):
    """Fetch CxOne scans filtered by status and age."""

    ENDPOINT = '/api/scans/'

    def execute(self, statuses=None, days_back=0):
        """Execute scan discovery.

        Args:
            statuses (str or list, optional): Scan statuses, comma separated
            days_back (int): Only scans created in the last N days; 0 for all

        Returns:
            list: List of Scan objects

        Raises:
            ValueError: If a status is unknown or days_back is out of range
        """
        statuses = split_csv(statuses)
        unknown = [status for status in statuses if status not in SCAN_STATUSES]
        if unknown:
            raise ValueError(f"Unknown scan status: {', '.join(unknown)}. "
                             f"Expected one of: {', '.join(SCAN_STATUSES)}")
        validate_days_back(days_back, self.config.max_days_back)

        params = []
        if statuses:
            params.append(('statuses', ','.join(statuses)))
        if days_back > 0:
            params.append(('from-date', from_date(days_back)))

        self.log(f"Fetching scans from {self.ENDPOINT} "
                 f"(statuses={','.join(statuses) or 'any'}, days_back={days_back or 'all'})...")

        scans = self.api_client.get_paginated(
            self.ENDPOINT,
            items_key='scans',
            total_key='filteredTotalCount',
            page_size=self.config.page_size_scans,
            params=params,
            mapper=Scan.from_dict
        )

        self.log(f"Found {len(scans)} scans")
        return scans
