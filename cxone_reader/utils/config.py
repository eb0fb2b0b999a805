import os
from dotenv import load_dotenv

OUTPUT_FORMATS = ('csv', 'xlsx')


class Config:
    def __init__(self):
        """Initialize configuration with default values."""
        # Authentication
        self.api_key = None

        # General
        self.debug = False

        # Page sizes accepted by the CxOne endpoints
        self.page_size_projects = 100
        self.page_size_scans = 100
        self.page_size_branches = 100
        self.page_size_results = 20

        # API settings
        self.renewal_margin_minutes = 5
        self.request_timeout = None
        self.max_days_back = 366

        # Input files
        self.branch_mapping_file = None

        # Output settings
        self.output_directory = "./output"
        self.output_format = "csv"
        self.output_filename_template = "{kind}_{tenant}_{timestamp}.{extension}"

    @classmethod
    def from_args(cls, args, config=None):
        """Create configuration from command line arguments.

        Args:
            args: Parsed command line arguments
            config (Config, optional): Existing configuration to override
        """
        config = config or cls()

        if getattr(args, 'api_key', None):
            config.api_key = args.api_key
        if getattr(args, 'debug', False):
            config.debug = True
        if getattr(args, 'output_dir', None):
            config.output_directory = args.output_dir
        if getattr(args, 'format', None):
            config.output_format = args.format
        if getattr(args, 'branch_mapping', None):
            config.branch_mapping_file = args.branch_mapping

        return config

    @classmethod
    def from_env(cls, env_file='.env'):
        """Create configuration from environment variables.

        Args:
            env_file (str): Path to environment file (default: '.env')
        """
        load_dotenv(env_file)

        config = cls()
        config.api_key = os.getenv('CXONE_API_KEY')
        config.debug = os.getenv('CXONE_DEBUG', '').lower() == 'true'

        if os.getenv('CXONE_OUTPUT_DIR'):
            config.output_directory = os.getenv('CXONE_OUTPUT_DIR')
        if os.getenv('CXONE_OUTPUT_FORMAT'):
            config.output_format = os.getenv('CXONE_OUTPUT_FORMAT').lower()
        if os.getenv('CXONE_BRANCH_MAPPING'):
            config.branch_mapping_file = os.getenv('CXONE_BRANCH_MAPPING')

        return config

    def validate(self):
        """Validate the configuration.

        The API key may be absent here; the CLI then prompts for it.

        Returns:
            tuple: (bool, str) - (is_valid, error_message)
        """
        if self.output_format not in OUTPUT_FORMATS:
            return False, f"Output format must be one of: {', '.join(OUTPUT_FORMATS)}"
        if self.branch_mapping_file and not os.path.isfile(self.branch_mapping_file):
            return False, f"Branch mapping file not found: {self.branch_mapping_file}"
        return True, None
