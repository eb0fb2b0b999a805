"""Project data model."""

from cxone_reader.models.fields import (
    as_bool, as_datetime, as_int, as_str, as_str_list, as_tags,
    flatten_tags, format_datetime, join_values, lookup,
)


class Project:
    """Represents a CxOne project."""

    def __init__(self, project_id='', name='', tenant_id='', created_at=None, updated_at=None,
                 groups=None, repo_url='', main_branch='', origin='', tags=None,
                 criticality=None, private_package=False, imported_project_name=''):
        """Initialize a Project.

        Args:
            project_id (str): The project ID
            name (str): The project name
            tenant_id (str): The owning tenant ID
            created_at (datetime, optional): Creation timestamp
            updated_at (datetime, optional): Last update timestamp
            groups (list, optional): Group IDs the project belongs to
            repo_url (str): Repository URL
            main_branch (str): Main branch name
            origin (str): Where the project was created from
            tags (dict, optional): Tag key to value, value may be empty
            criticality (int, optional): Criticality level
            private_package (bool): Whether the project is a private package
            imported_project_name (str): Name of the project it was imported from
        """
        self.id = project_id
        self.name = name
        self.tenant_id = tenant_id
        self.created_at = created_at
        self.updated_at = updated_at
        self.groups = list(groups or [])
        self.repo_url = repo_url
        self.main_branch = main_branch
        self.origin = origin
        self.tags = dict(tags or {})
        self.criticality = criticality
        self.private_package = private_package
        self.imported_project_name = imported_project_name
        self.branches = []

    @property
    def groups_str(self):
        return join_values(self.groups)

    @property
    def tags_str(self):
        return flatten_tags(self.tags)

    @property
    def branches_str(self):
        return join_values(self.branches)

    def add_branches(self, branch_names):
        """Append branch names found by branch enrichment."""
        self.branches.extend(branch_names)

    def to_dict(self):
        """Convert to a flat dictionary for export."""
        return {
            'project_id': self.id,
            'project_name': self.name,
            'tenant_id': self.tenant_id,
            'created_at': format_datetime(self.created_at),
            'updated_at': format_datetime(self.updated_at),
            'groups': self.groups_str,
            'repo_url': self.repo_url,
            'main_branch': self.main_branch,
            'origin': self.origin,
            'tags': self.tags_str,
            'criticality': self.criticality,
            'private_package': self.private_package,
            'imported_project_name': self.imported_project_name,
            'branches': self.branches_str
        }

    @classmethod
    def from_dict(cls, data):
        """Create a Project from an API payload.

        Every field is read on its own; absent or mistyped fields fall back
        to their zero value.
        """
        return cls(
            project_id=as_str(lookup(data, 'id')),
            name=as_str(lookup(data, 'name')),
            tenant_id=as_str(lookup(data, 'tenantId')),
            created_at=as_datetime(lookup(data, 'createdAt')),
            updated_at=as_datetime(lookup(data, 'updatedAt')),
            groups=as_str_list(lookup(data, 'groups')),
            repo_url=as_str(lookup(data, 'repoUrl')),
            main_branch=as_str(lookup(data, 'mainBranch')),
            origin=as_str(lookup(data, 'origin')),
            tags=as_tags(lookup(data, 'tags')),
            criticality=as_int(lookup(data, 'criticality')),
            private_package=as_bool(lookup(data, 'privatePackage')),
            imported_project_name=as_str(lookup(data, 'imported_proj_name'))
        )

    def __repr__(self):
        return f"Project(id={self.id}, name={self.name})"
