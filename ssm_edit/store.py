"""
Parameter Store client.

Thin wrapper around the boto3 SSM client: a paginated, decrypted listing
of the direct children of a prefix and single-parameter writes.
"""

import dataclasses
import enum
from typing import Any, Dict, Iterator, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import RemoteError, ValidationError


class EntryKind(enum.Enum):
    """Parameter types understood by the store."""

    PLAIN = "String"
    LIST = "StringList"
    SECRET = "SecureString"

    @property
    def is_secret(self) -> bool:
        return self is EntryKind.SECRET


@dataclasses.dataclass(frozen=True)
class Entry:
    """One parameter: fully-qualified name, value and kind."""

    name: str
    value: str
    kind: EntryKind = EntryKind.PLAIN

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Entry":
        """Build an Entry from a ``Parameters`` item of an SSM response."""
        return cls(
            name=data['Name'],
            value=data.get('Value', ''),
            kind=EntryKind(data.get('Type', EntryKind.PLAIN.value)),
        )


def _remote_error(exc: Exception, operation: str) -> RemoteError:
    """Translate a botocore exception into our error taxonomy."""
    if isinstance(exc, ClientError):
        error = exc.response.get('Error', {})
        code = error.get('Code', '')
        message = error.get('Message') or str(exc)
        if code in ('ParameterAlreadyExists', 'ValidationException'):
            return ValidationError(message, code=code, operation=operation)
        return RemoteError(message, code=code, operation=operation)
    return RemoteError(str(exc), operation=operation)


class ParameterStore:
    """Reads and writes parameters through an SSM client."""

    def __init__(self, client):
        """
        Initialize the store.

        Args:
            client: A boto3 ``ssm`` client (or anything with the same methods)
        """
        self.client = client

    @classmethod
    def from_session(cls, profile: Optional[str] = None,
                     region: Optional[str] = None) -> "ParameterStore":
        """
        Create a store using the standard AWS credential chain.

        Args:
            profile: Named profile from the shared AWS config, if any
            region: Region override, if any

        Returns:
            A ParameterStore bound to a fresh ``ssm`` client
        """
        try:
            session = boto3.session.Session(profile_name=profile, region_name=region)
            return cls(session.client('ssm'))
        except BotoCoreError as e:
            raise _remote_error(e, 'CreateClient') from e

    def iter_pages(self, prefix: str) -> Iterator[List[Dict[str, Any]]]:
        """
        Yield raw pages of parameters directly under ``prefix``.

        Requests continue with the returned continuation token until the
        store stops returning one.

        Args:
            prefix: Path to list (not recursive)

        Yields:
            The ``Parameters`` list of each response
        """
        request = {
            'Path': prefix,
            'Recursive': False,
            'WithDecryption': True,
        }
        while True:
            try:
                response = self.client.get_parameters_by_path(**request)
            except (ClientError, BotoCoreError) as e:
                raise _remote_error(e, 'GetParametersByPath') from e

            yield response.get('Parameters', [])

            next_token = response.get('NextToken')
            if not next_token:
                return
            request['NextToken'] = next_token

    def list(self, prefix: str) -> List[Entry]:
        """
        List every parameter directly under ``prefix``.

        Pages are collected before anything is returned, so a failure on
        any page raises RemoteError and yields no partial result.

        Args:
            prefix: Normalized prefix ending with '/'

        Returns:
            Entries in the order the store returned them
        """
        entries = []
        for page in self.iter_pages(prefix):
            entries.extend(Entry.from_api(item) for item in page)
        return entries

    def write(self, name: str, value: str, kind: EntryKind,
              overwrite: bool = True) -> Entry:
        """
        Create or update a single parameter.

        Args:
            name: Fully-qualified parameter name
            value: New value
            kind: Parameter type
            overwrite: False for creation, which must fail if the name exists

        Returns:
            The Entry that was written
        """
        try:
            self.client.put_parameter(
                Name=name,
                Value=value,
                Type=kind.value,
                Overwrite=overwrite,
            )
        except (ClientError, BotoCoreError) as e:
            raise _remote_error(e, 'PutParameter') from e
        return Entry(name=name, value=value, kind=kind)
