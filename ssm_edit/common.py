"""
Common formatting helpers for ssm-edit.

Prefix handling and the ``<key> = <value>`` rendering shared by the menu
and the edit prompt.
"""

from typing import Iterable, List

from .store import Entry

SEPARATOR = '/'
MASK = '********'


def normalize_prefix(prefix: str) -> str:
    """
    Normalize a prefix so it always ends with the path separator.

    Args:
        prefix: Prefix as typed by the user

    Returns:
        The stripped prefix with a trailing '/'
    """
    prefix = (prefix or '').strip()
    if not prefix.endswith(SEPARATOR):
        prefix += SEPARATOR
    return prefix


def relative_name(name: str, prefix: str) -> str:
    """Strip ``prefix`` from a fully-qualified name."""
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def display_value(entry: Entry, secure: bool = False) -> str:
    """
    Value to show for an entry.

    Args:
        entry: Entry to render
        secure: Whether secret values must be hidden

    Returns:
        MASK for secret entries in secure mode, the real value otherwise
    """
    if secure and entry.kind.is_secret:
        return MASK
    return entry.value


def format_entry(entry: Entry, prefix: str, secure: bool = False) -> str:
    return f"{relative_name(entry.name, prefix)} = {display_value(entry, secure)}"


def format_entries(entries: Iterable[Entry], prefix: str, secure: bool = False) -> List[str]:
    """
    Render one ``<key> = <value>`` line per entry.

    Lines are not de-duplicated; two entries whose relative names collide
    both appear.
    """
    return [format_entry(entry, prefix, secure) for entry in entries]
