"""Scan data model."""

from cxone_reader.models.fields import (
    as_datetime, as_str, as_str_list, as_tags,
    flatten_tags, format_datetime, join_values, lookup,
)

SCAN_STATUSES = ('Queued', 'Running', 'Completed', 'Failed', 'Partial', 'Canceled')


class Scan:
    """Represents a CxOne scan."""

    def __init__(self, scan_id='', project_id='', project_name='', status='', branch='',
                 created_at=None, updated_at=None, engines=None, user_agent='', initiator='',
                 tags=None, source_type='', source_origin=''):
        """Initialize a Scan.

        Args:
            scan_id (str): The scan ID
            project_id (str): The project ID
            project_name (str): The project name
            status (str): One of SCAN_STATUSES, or '' when unknown
            branch (str): The scanned branch
            created_at (datetime, optional): Scan creation timestamp
            updated_at (datetime, optional): Last update timestamp
            engines (list, optional): Engines that ran, e.g. ['sast', 'sca']
            user_agent (str): Client that started the scan
            initiator (str): User or integration that started the scan
            tags (dict, optional): Tag key to value, value may be empty
            source_type (str): e.g. 'zip' or 'git'
            source_origin (str): e.g. 'UI' or 'webapp'
        """
        self.id = scan_id
        self.project_id = project_id
        self.project_name = project_name
        self.status = status
        self.branch = branch
        self.created_at = created_at
        self.updated_at = updated_at
        self.engines = list(engines or [])
        self.user_agent = user_agent
        self.initiator = initiator
        self.tags = dict(tags or {})
        self.source_type = source_type
        self.source_origin = source_origin

    @property
    def engines_str(self):
        return join_values(self.engines)

    @property
    def tags_str(self):
        return flatten_tags(self.tags)

    def to_dict(self):
        """Convert to a flat dictionary for export."""
        return {
            'scan_id': self.id,
            'project_id': self.project_id,
            'project_name': self.project_name,
            'status': self.status,
            'branch': self.branch,
            'created_at': format_datetime(self.created_at),
            'updated_at': format_datetime(self.updated_at),
            'engines': self.engines_str,
            'user_agent': self.user_agent,
            'initiator': self.initiator,
            'tags': self.tags_str,
            'source_type': self.source_type,
            'source_origin': self.source_origin
        }

    @classmethod
    def from_dict(cls, data):
        """Create a Scan from an API payload, one guarded field at a time."""
        return cls(
            scan_id=as_str(lookup(data, 'id')),
            project_id=as_str(lookup(data, 'projectId')),
            project_name=as_str(lookup(data, 'projectName')),
            status=as_str(lookup(data, 'status')),
            branch=as_str(lookup(data, 'branch')),
            created_at=as_datetime(lookup(data, 'createdAt')),
            updated_at=as_datetime(lookup(data, 'updatedAt')),
            engines=as_str_list(lookup(data, 'engines')),
            user_agent=as_str(lookup(data, 'userAgent')),
            initiator=as_str(lookup(data, 'initiator')),
            tags=as_tags(lookup(data, 'tags')),
            source_type=as_str(lookup(data, 'sourceType')),
            source_origin=as_str(lookup(data, 'sourceOrigin'))
        )

    def __repr__(self):
        return f"Scan(id={self.id}, project={self.project_name}, branch={self.branch})"
