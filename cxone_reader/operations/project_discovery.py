"""Project discovery operation."""

from cxone_reader.operations.base import Operation
from cxone_reader.models.project import Project


def split_csv(values):
    """Split a comma separated string (or list of them) into trimmed, non-empty items."""
    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    items = []
    for value in values:
        items.extend(part.strip() for part in value.split(',') if part.strip())
    return items


class ProjectDiscovery(Operation):
    """Fetch CxOne projects, optionally filtered by name or ID."""

    ENDPOINT = '/api/projects/'

    def execute(self, names=None, ids=None):
        """Execute project discovery.

        Args:
            names (str or list, optional): Project names, comma separated
            ids (str or list, optional): Project IDs, comma separated

        Returns:
            list: List of Project objects

        Raises:
            ValueError: If both names and ids are given
        """
        names = split_csv(names)
        ids = split_csv(ids)
        if names and ids:
            raise ValueError("Filter projects by names or by ids, not both")

        params = [('names', name) for name in names] + [('ids', project_id) for project_id in ids]

        self.log(f"Fetching projects from {self.ENDPOINT}"
                 + (f" ({len(params)} filter values)" if params else "") + "...")

        projects = self.api_client.get_paginated(
            self.ENDPOINT,
            items_key='projects',
            total_key='filteredTotalCount',
            page_size=self.config.page_size_projects,
            params=params,
            mapper=Project.from_dict
        )

        self.log(f"Found {len(projects)} projects")
        return projects
