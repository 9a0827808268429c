"""
Shared pytest fixtures and helpers for ssm-edit tests.

The edit loop is driven through scripted prompts and an in-memory store,
so nothing here touches a terminal or AWS.
"""

import pytest
from unittest.mock import Mock

from ssm_edit.exceptions import PromptCancelled, RemoteError, ValidationError
from ssm_edit.prompt import Prompt
from ssm_edit.retry import RetryPolicy
from ssm_edit.store import Entry, EntryKind


class ScriptedPrompt(Prompt):
    """
    Prompt that replays canned answers.

    Each answer is returned in order by whichever prompt method is called
    next. An exception instance is raised instead of returned. A callable
    answer receives the menu items (select_one) or the prompt arguments
    (read_line) and its result is returned.
    """

    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = []

    def _next(self, call, *args):
        self.calls.append((call,) + args)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {call}{args}")
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        if callable(answer):
            return answer(*args)
        return answer

    def select_one(self, message, items):
        return self._next('select_one', message, list(items))

    def read_line(self, message, default='', masked=False):
        return self._next('read_line', message, default, masked)

    def menus(self):
        """Items shown by each select_one call."""
        return [call[2] for call in self.calls if call[0] == 'select_one']

    def lines(self):
        """(message, default, masked) for each read_line call."""
        return [call[1:] for call in self.calls if call[0] == 'read_line']


class InMemoryStore:
    """
    Store double keeping parameters in a dict.

    With ``lagging=True`` listings keep returning the initial snapshot, as
    if the backing service had not yet converged after a write.
    """

    def __init__(self, entries=(), lagging=False, failures=0):
        self.data = {entry.name: entry for entry in entries}
        self.snapshot = list(entries)
        self.lagging = lagging
        self.failures = failures
        self.list_calls = []
        self.write_calls = []

    def list(self, prefix):
        self.list_calls.append(prefix)
        if self.lagging:
            return list(self.snapshot)
        return [entry for name, entry in self.data.items() if name.startswith(prefix)]

    def write(self, name, value, kind, overwrite=True):
        self.write_calls.append((name, value, kind, overwrite))
        if self.failures:
            self.failures -= 1
            raise RemoteError("Rate exceeded", code="ThrottlingException")
        if not overwrite and name in self.data:
            raise ValidationError("The parameter already exists.", code="ParameterAlreadyExists")
        entry = Entry(name, value, kind)
        self.data[name] = entry
        return entry


@pytest.fixture
def entry_factory():
    """Factory for Entry objects under /app/test/."""
    def _create_entry(name, value, kind=EntryKind.PLAIN, prefix='/app/test/'):
        return Entry(prefix + name, value, kind)
    return _create_entry


@pytest.fixture
def sample_entries(entry_factory):
    """A=1, B=2 and a secret C."""
    return [
        entry_factory('A', '1'),
        entry_factory('B', '2'),
        entry_factory('C', 'hunter2', EntryKind.SECRET),
    ]


@pytest.fixture
def sleep():
    """Sleep stand-in recording the delays it was asked for."""
    return Mock()


@pytest.fixture
def retry_policy(sleep):
    """Default 5 x 200ms policy that never actually sleeps."""
    return RetryPolicy(sleep=sleep)


@pytest.fixture
def cancelled():
    """The exception a prompt raises on Ctrl+C."""
    return PromptCancelled()


@pytest.fixture
def scripted_prompt():
    """The ScriptedPrompt class, for building prompts with canned answers."""
    return ScriptedPrompt


@pytest.fixture
def in_memory_store():
    """The InMemoryStore class, for building store doubles."""
    return InMemoryStore


# Register custom markers to avoid warnings
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
