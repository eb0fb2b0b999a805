"""Export of records to CSV or Excel."""

from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils.dataframe import dataframe_to_rows

# Excel row limit (1,048,576 rows including header)
EXCEL_MAX_ROWS = 1048576


class RecordExporter:
    """Write Project, Scan or Result records to disk."""

    def __init__(self, debug=False, debug_logger=None):
        """Initialize the exporter.

        Args:
            debug (bool): Enable debug output
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.debug = debug
        self.logger = debug_logger

    def to_dataframe(self, records, record_class=None):
        """Flatten records into a DataFrame, one row per record.

        When ``record_class`` is given its columns are used, so an empty
        list still produces a header row.
        """
        columns = list(record_class().to_dict()) if record_class else None
        return pd.DataFrame([record.to_dict() for record in records], columns=columns)

    def export(self, records, output_path, output_format='csv', record_class=None):
        """Write records to a file.

        Args:
            records (list): Objects with a to_dict() method
            output_path (str): Destination file
            output_format (str): 'csv' or 'xlsx'
            record_class (type, optional): Record type that supplies the columns

        Returns:
            int: Number of rows written
        """
        df = self.to_dataframe(records, record_class)
        if output_format == 'xlsx':
            rows = self._write_xlsx(df, output_path)
        else:
            df.to_csv(output_path, index=False, encoding='utf-8')
            rows = len(df)

        if self.logger:
            self.logger.log(f"Wrote {rows:,} rows to {output_path}")
        if self.debug:
            print(f"Wrote {rows:,} rows to {output_path}")
        return rows

    def _write_xlsx(self, df, output_path):
        """Write a DataFrame to a single-sheet workbook, capped at Excel's row limit."""
        output_path = Path(output_path)
        if output_path.suffix.lower() != '.xlsx':
            output_path = output_path.with_suffix('.xlsx')

        if len(df) + 1 > EXCEL_MAX_ROWS:
            print(f"Warning: Excel row limit ({EXCEL_MAX_ROWS:,}) exceeded, "
                  f"writing only the first {EXCEL_MAX_ROWS - 1:,} rows.")
            df = df.head(EXCEL_MAX_ROWS - 1)

        wb = Workbook()
        ws = wb.active
        ws.title = "Data"
        for row in dataframe_to_rows(df, index=False, header=True):
            ws.append(row)
        wb.save(str(output_path))
        return len(df)
