"""
Interactive Parameter Store Editor

Browse and edit AWS Systems Manager parameters under a prefix from a
searchable terminal menu.
"""

from .editor import EditLoop
from .store import Entry, EntryKind, ParameterStore

__version__ = '0.1.0'
__all__ = ['EditLoop', 'Entry', 'EntryKind', 'ParameterStore']
