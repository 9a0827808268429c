"""
Interactive prompts.

The edit loop only talks to the small ``Prompt`` interface: pick one item
from a searchable menu, or read one line of text. ``TerminalPrompt``
implements it with prompt_toolkit; tests substitute their own.
"""

import abc
from typing import Callable, List, NamedTuple, Optional, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.application.current import get_app
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.validation import Validator

from .exceptions import PromptCancelled


class MenuItem(NamedTuple):
    """A menu line and the text the search box matches it against."""

    label: str
    key: str


def matches(item: MenuItem, query: str) -> bool:
    """Case-insensitive substring match of ``query`` against the item key."""
    return query.lower() in item.key.lower()


def filter_items(items: Sequence[MenuItem], query: str) -> List[int]:
    """
    Indexes of the items matching ``query``.

    Args:
        items: Menu items in display order
        query: Search text; blank shows everything

    Returns:
        Matching indexes in display order
    """
    query = query.strip()
    return [index for index, item in enumerate(items) if matches(item, query)]


def resolve_selection(items: Sequence[MenuItem], text: str) -> Optional[int]:
    """
    Map the text left in the search box to a single item.

    An exact key match wins; otherwise the search must narrow the menu
    down to exactly one item.
    """
    text = text.strip()
    if not text:
        return None
    for index, item in enumerate(items):
        if item.key == text:
            return index
    candidates = filter_items(items, text)
    if len(candidates) == 1:
        return candidates[0]
    return None


class MenuCompleter(Completer):
    """Completion menu listing every item whose key matches the typed text."""

    def __init__(self, items: Sequence[MenuItem]):
        self.items = list(items)

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        for index in filter_items(self.items, text):
            item = self.items[index]
            yield Completion(
                item.key,
                start_position=-len(text),
                display=item.label,
            )


class Prompt(abc.ABC):
    """What the edit loop needs from a terminal UI."""

    @abc.abstractmethod
    def select_one(self, message: str, items: Sequence[MenuItem]) -> int:
        """
        Let the user pick one item.

        Returns:
            Index of the chosen item

        Raises:
            PromptCancelled: The user interrupted the prompt
        """

    @abc.abstractmethod
    def read_line(self, message: str, default: str = '', masked: bool = False) -> str:
        """
        Read one line of text, optionally pre-filled and/or masked.

        Raises:
            PromptCancelled: The user interrupted the prompt
        """


class TerminalPrompt(Prompt):
    """
    Prompt backed by prompt_toolkit.

    Every prompt runs in a fresh session so neither completers nor input
    history carry over from one prompt to the next.
    """

    def __init__(self, session_factory: Callable[[], PromptSession] = PromptSession,
                 menu_height: int = 20):
        self.session_factory = session_factory
        self.menu_height = menu_height

    def select_one(self, message: str, items: Sequence[MenuItem]) -> int:
        items = list(items)
        validator = Validator.from_callable(
            lambda text: resolve_selection(items, text) is not None,
            error_message="Type to search, then pick a single item from the list",
            move_cursor_to_end=True,
        )
        session = self.session_factory()
        try:
            text = session.prompt(
                f"{message}: ",
                completer=MenuCompleter(items),
                complete_while_typing=True,
                validator=validator,
                validate_while_typing=False,
                reserve_space_for_menu=self.menu_height,
                pre_run=lambda: get_app().current_buffer.start_completion(select_first=False),
            )
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptCancelled() from e
        return resolve_selection(items, text)

    def read_line(self, message: str, default: str = '', masked: bool = False) -> str:
        session = self.session_factory()
        try:
            return session.prompt(f"{message}: ", default=default, is_password=masked)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptCancelled() from e
