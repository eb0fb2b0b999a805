"""Scan result retrieval operation."""

from cxone_reader.operations.base import Operation
from cxone_reader.models.result import Result


class ResultFetcher(Operation):
    """Fetch all findings of one scan."""

    ENDPOINT = '/api/results/'

    def execute(self, scan_id):
        """Execute result retrieval.

        Args:
            scan_id (str): The scan whose results are fetched

        Returns:
            list: List of Result objects

        Raises:
            ValueError: If scan_id is empty
        """
        if not scan_id:
            raise ValueError("A scan ID is required to fetch results")

        self.log(f"Fetching results for scan {scan_id}...")

        # Results report no filtered count, only totalCount
        results = self.api_client.get_paginated(
            self.ENDPOINT,
            items_key='results',
            total_key='totalCount',
            page_size=self.config.page_size_results,
            params=[('scan-id', scan_id)],
            mapper=Result.from_dict
        )

        self.log(f"Found {len(results)} results for scan {scan_id}")
        return results
