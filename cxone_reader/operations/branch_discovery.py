"""Branch enrichment operation."""

from cxone_reader.operations.base import Operation
from cxone_reader.models.fields import as_str


class BranchDiscovery(Operation):
    """Attach branch names to already fetched projects."""

    ENDPOINT = '/api/projects/branches'

    def execute(self, projects):
        """Execute branch discovery for all projects, one project at a time.

        Args:
            projects (list): List of Project objects, enriched in place

        Returns:
            list: The same Project objects
        """
        self.log(f"Discovering branches for {len(projects)} projects...")

        total_branches = 0
        for project in projects:
            found = self._get_branches_for_project(project)
            total_branches += found

            if self.progress:
                self.progress.update(1)
                self.progress.set_postfix(
                    total_branches=total_branches,
                    current_project=project.name[:30]
                )

        self.log(f"Found {total_branches} branches across {len(projects)} projects")
        return projects

    def _get_branches_for_project(self, project):
        """Page through a project's branches until the server returns nothing.

        This endpoint reports no total count; an empty or null page ends the loop.

        Args:
            project (Project): Project to enrich

        Returns:
            int: Number of branch names added
        """
        page_size = self.config.page_size_branches
        offset = 0
        added = 0

        while True:
            params = [('offset', offset), ('limit', page_size), ('project-id', project.id)]
            response_data = self.api_client.get(self.ENDPOINT, params=params)

            if not response_data or not isinstance(response_data, list):
                break

            names = [as_str(name) for name in response_data if as_str(name)]
            project.add_branches(names)
            added += len(names)
            offset += page_size

        self.log(f"  Project {project.name}: {added} branches")
        return added
