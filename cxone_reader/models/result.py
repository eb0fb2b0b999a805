"""Scan result (finding) data model."""

from cxone_reader.models.fields import (
    as_datetime, as_int, as_str, as_text, format_datetime, lookup,
)


class Result:
    """Represents one finding of a scan.

    The owning scan ID is supplied by the caller and not stored here.
    """

    def __init__(self, result_type='', similarity_id='', status='', state='', severity='',
                 created=None, first_found_at=None, found_at=None, description='',
                 query_name='', group='', language_name='', cwe_id=None, comments=''):
        """Initialize a Result.

        Args:
            result_type (str): Engine result type, e.g. 'sast' or 'sca'
            similarity_id (str): Identity of the finding across scans
            status (str): NEW, RECURRENT or FIXED
            state (str): Triage state, e.g. TO_VERIFY
            severity (str): HIGH, MEDIUM, LOW or INFO
            created (datetime, optional): When the result was created
            first_found_at (datetime, optional): First scan that found it
            found_at (datetime, optional): When this scan found it
            description (str): Finding description
            query_name (str): Query that produced the finding
            group (str): Query group
            language_name (str): Source language
            cwe_id (int, optional): CWE identifier
            comments (str): Triage comments rendered as text
        """
        self.type = result_type
        self.similarity_id = similarity_id
        self.status = status
        self.state = state
        self.severity = severity
        self.created = created
        self.first_found_at = first_found_at
        self.found_at = found_at
        self.description = description
        self.query_name = query_name
        self.group = group
        self.language_name = language_name
        self.cwe_id = cwe_id
        self.comments = comments

    def to_dict(self):
        """Convert to a flat dictionary for export."""
        return {
            'type': self.type,
            'similarity_id': self.similarity_id,
            'status': self.status,
            'state': self.state,
            'severity': self.severity,
            'created': format_datetime(self.created),
            'first_found_at': format_datetime(self.first_found_at),
            'found_at': format_datetime(self.found_at),
            'description': self.description,
            'query_name': self.query_name,
            'group': self.group,
            'language_name': self.language_name,
            'cwe_id': self.cwe_id,
            'comments': self.comments
        }

    @classmethod
    def from_dict(cls, data):
        """Create a Result from an API payload, one guarded field at a time."""
        return cls(
            result_type=as_str(lookup(data, 'type')),
            similarity_id=as_str(lookup(data, 'similarityId')),
            status=as_str(lookup(data, 'status')),
            state=as_str(lookup(data, 'state')),
            severity=as_str(lookup(data, 'severity')),
            created=as_datetime(lookup(data, 'created')),
            first_found_at=as_datetime(lookup(data, 'firstFoundAt')),
            found_at=as_datetime(lookup(data, 'foundAt')),
            description=as_str(lookup(data, 'description')),
            query_name=as_str(lookup(data, 'data', 'queryName')),
            group=as_str(lookup(data, 'data', 'group')),
            language_name=as_str(lookup(data, 'data', 'languageName')),
            cwe_id=as_int(lookup(data, 'vulnerabilityDetails', 'cweId')),
            comments=as_text(lookup(data, 'comments'))
        )

    def __repr__(self):
        return f"Result(similarity_id={self.similarity_id}, severity={self.severity})"
