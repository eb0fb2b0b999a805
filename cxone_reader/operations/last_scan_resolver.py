"""Last completed scan per project."""

from cxone_reader.operations.base import Operation
from cxone_reader.models.scan import Scan
from cxone_reader.utils.exceptions import ConfigurationError


class LastScanResolver(Operation):
    """Find the most recent completed scan of each project."""

    ENDPOINT = '/api/projects/last-scan'

    def execute(self, projects, use_main_branch=False, branch_mapping=None):
        """Execute last-scan resolution, one request per project in list order.

        Args:
            projects (list): List of Project objects
            use_main_branch (bool): Restrict to each project's main branch
            branch_mapping (dict, optional): Project name to list of branch names,
                consulted only when use_main_branch is False

        Returns:
            list: Scan objects, at most one per project

        Raises:
            ConfigurationError: If the mapping has more than one row for a project
        """
        branch_mapping = branch_mapping or {}
        scans = []
        not_found = 0

        mode = "main branch" if use_main_branch else (
            "mapped branches" if branch_mapping else "any branch")
        self.log(f"Finding last completed scans for {len(projects)} projects ({mode})...")

        for project in projects:
            params = [
                ('project-ids', project.id),
                ('scan-status', 'Completed'),
                ('use-main-branch', 'true' if use_main_branch else 'false')
            ]
            if not use_main_branch:
                branch = self._mapped_branch(project, branch_mapping)
                if branch:
                    params.append(('branch', branch))

            scan = self._resolve(project, params)
            if scan:
                scans.append(scan)
                self.log(f"  Found scan for {project.name}: {scan.id} ({scan.branch})")
            else:
                not_found += 1
                self.log(f"  No completed scan for {project.name}")

            if self.progress:
                self.progress.update(1)
                self.progress.set_postfix(found=len(scans), not_found=not_found)

        self.log(f"Last-scan resolution completed: {len(scans)} found, {not_found} not found")
        return scans

    def _mapped_branch(self, project, branch_mapping):
        """Look up the branch configured for a project.

        Returns:
            str or None: The configured branch, None if none is configured
        """
        branches = branch_mapping.get(project.name)
        if not branches:
            return None
        if isinstance(branches, str):
            return branches or None
        if len(branches) > 1:
            raise ConfigurationError(
                f"Branch mapping has {len(branches)} rows for project '{project.name}'; "
                "the mapping file must contain at most one row per project"
            )
        return branches[0] or None

    def _resolve(self, project, params):
        """Request the last scan of one project and map it.

        Returns:
            Scan or None
        """
        response_data = self.api_client.get(self.ENDPOINT, params=params)
        if not isinstance(response_data, dict):
            return None

        scan_data = response_data.get(project.id)
        if not isinstance(scan_data, dict):
            return None

        scan_data = dict(scan_data)
        scan_data['projectId'] = project.id
        scan_data['projectName'] = project.name
        return Scan.from_dict(scan_data)
