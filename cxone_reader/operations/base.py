class Operation:
    """Base class for all operations."""

    def __init__(self, config, session, api_client=None, progress=None, debug_logger=None):
        """Initialize the operation.

        Args:
            config (Config): Configuration instance
            session (CxOneSession): Authenticated session
            api_client (APIClient, optional): API client instance
            progress (ProgressTracker, optional): Progress tracker instance
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.config = config
        self.session = session
        self.api_client = api_client
        self.progress = progress
        self.logger = debug_logger

    def log(self, message):
        """Write to the debug log, and to the console in debug mode."""
        if self.logger:
            self.logger.log(message)
        if self.config.debug:
            if self.progress:
                self.progress.print(message)
            else:
                print(message)

    def execute(self, *args, **kwargs):
        """Execute the operation.

        This method should be overridden by specific operations.
        """
        raise NotImplementedError("Operation must implement execute method")
