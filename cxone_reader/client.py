"""High-level read API for CxOne projects, scans and results."""

from cxone_reader.utils.api_client import APIClient
from cxone_reader.utils.auth import CxOneSession
from cxone_reader.utils.branch_mapping import load_branch_mapping
from cxone_reader.utils.config import Config
from cxone_reader.operations.branch_discovery import BranchDiscovery
from cxone_reader.operations.last_scan_resolver import LastScanResolver
from cxone_reader.operations.project_discovery import ProjectDiscovery
from cxone_reader.operations.result_fetcher import ResultFetcher
from cxone_reader.operations.scan_discovery import ScanDiscovery


class CxOneClient:
    """Entry point for library use.

    Example:
        client = CxOneClient.login(api_key)
        projects = client.get_projects(include_branches=True)
        scans = client.get_last_scans(projects, use_main_branch=True)
    """

    def __init__(self, session, config=None, progress=None, debug_logger=None):
        """Initialize the client around an authenticated session.

        Args:
            session (CxOneSession): Authenticated session
            config (Config, optional): Configuration instance
            progress (ProgressTracker, optional): Progress tracker instance
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.config = config or Config()
        self.session = session
        self.progress = progress
        self.logger = debug_logger
        self.api_client = APIClient(session, self.config, self.config.debug, debug_logger)

    @classmethod
    def login(cls, api_key, config=None, progress=None, debug_logger=None):
        """Exchange an API key for a session and wrap it in a client.

        Raises:
            InvalidCredential: If the key is malformed or rejected
        """
        config = config or Config()
        session = CxOneSession.login(
            api_key,
            renewal_margin_minutes=config.renewal_margin_minutes,
            request_timeout=config.request_timeout,
            debug=config.debug,
            debug_logger=debug_logger
        )
        return cls(session, config, progress, debug_logger)

    @property
    def tenant(self):
        return self.session.tenant

    def _operation(self, operation_class):
        return operation_class(self.config, self.session, self.api_client, self.progress, self.logger)

    def _start_bar(self, total, description):
        if self.progress:
            self.progress.create_bar(total, description)

    def _end_bar(self):
        if self.progress:
            self.progress.close()

    def get_projects(self, names=None, ids=None, include_branches=False):
        """List projects, optionally filtered by names or ids (not both).

        Args:
            names (str or list, optional): Project names, comma separated
            ids (str or list, optional): Project IDs, comma separated
            include_branches (bool): Also fetch each project's branches

        Returns:
            list: Project objects
        """
        projects = self._operation(ProjectDiscovery).execute(names=names, ids=ids)
        if include_branches and projects:
            self.add_branches(projects)
        return projects

    def add_branches(self, projects):
        """Fetch and attach branch names to each project."""
        self._start_bar(len(projects), "Fetching branches")
        try:
            return self._operation(BranchDiscovery).execute(projects)
        finally:
            self._end_bar()

    def get_scans(self, statuses=None, days_back=0):
        """List scans by status and age.

        Args:
            statuses (str or list, optional): Scan statuses, comma separated
            days_back (int): 1..366 to limit history, 0 for all

        Returns:
            list: Scan objects
        """
        return self._operation(ScanDiscovery).execute(statuses=statuses, days_back=days_back)

    def get_results(self, scan_id):
        """List every result of a scan."""
        return self._operation(ResultFetcher).execute(scan_id)

    def get_last_scans(self, projects, use_main_branch=False, branch_mapping=None):
        """Resolve the last completed scan of each project.

        Args:
            projects (list): Project objects
            use_main_branch (bool): Restrict to each project's main branch
            branch_mapping (dict, optional): Project name to list of branch names

        Returns:
            list: Scan objects, at most one per project
        """
        self._start_bar(len(projects), "Finding last scans")
        try:
            return self._operation(LastScanResolver).execute(
                projects,
                use_main_branch=use_main_branch,
                branch_mapping=branch_mapping
            )
        finally:
            self._end_bar()

    def get_last_scans_for_branches(self, projects, mapping_file):
        """Resolve last scans on the branches named in a ``Projects,Branches`` CSV file."""
        return self.get_last_scans(projects, use_main_branch=False,
                                   branch_mapping=load_branch_mapping(mapping_file))
