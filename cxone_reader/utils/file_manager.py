"""Output file management utilities."""

import os
from datetime import datetime


class FileManager:
    """Manage output and log file paths."""

    def __init__(self, config, tenant_name='cxone', debug=False):
        """Initialize the file manager.

        Args:
            config (Config): Configuration instance
            tenant_name (str): Tenant name used in file names
            debug (bool): Enable debug output
        """
        self.config = config
        self.tenant_name = tenant_name
        self.debug = debug
        self.timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')

    def setup_directories(self):
        """Create the output directory."""
        os.makedirs(self.config.output_directory, exist_ok=True)

        if self.debug:
            print(f"Output directory: {self.config.output_directory}")

    def get_output_file_path(self, kind, extension=None):
        """Generate the output file path for one kind of record.

        Args:
            kind (str): Record kind, e.g. 'projects'
            extension (str, optional): File extension, defaults to the output format

        Returns:
            str: Full path to output file
        """
        filename = self.config.output_filename_template.format(
            kind=kind,
            tenant=self.tenant_name,
            timestamp=self.timestamp,
            extension=extension or self.config.output_format
        )
        return os.path.join(self.config.output_directory, filename)

    def get_debug_log_path(self, kind):
        """Generate the debug log file path.

        Returns:
            str: Full path to debug log file
        """
        output_path = self.get_output_file_path(kind)
        return os.path.splitext(output_path)[0] + '_debug.txt'
