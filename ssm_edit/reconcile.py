"""
Reconciliation of a fresh listing with the last local write.

Parameter Store reads can lag behind writes for a short while. Folding the
most recent successful write back into the listing keeps the menu from
showing the old value right after a save.
"""

from typing import Iterable, List, Optional

from .store import Entry


def reconcile(entries: Iterable[Entry], latest: Optional[Entry] = None) -> List[Entry]:
    """
    Merge the latest write into a listing and sort it by name.

    Args:
        entries: Entries as fetched from the store
        latest: The most recent successful write, if any

    Returns:
        A new list, sorted ascending by full name, in which the entry named
        like ``latest`` (if present) is replaced by ``latest``
    """
    merged = list(entries)
    if latest is not None:
        merged = [latest if entry.name == latest.name else entry for entry in merged]
    return sorted(merged, key=lambda entry: entry.name)
