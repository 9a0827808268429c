"""
Interactive Parameter Editor

The edit loop behind ``ssm-edit``: list the parameters under a prefix,
let the user pick one from a searchable menu, edit or create a value and
write it back with bounded retry.

The store may lag behind a write for a moment, so the loop remembers its
most recent successful write and folds it into the next listing.
"""

import enum
import sys
from typing import List, Optional, Union

from .common import display_value, format_entries, normalize_prefix, relative_name
from .exceptions import PersistError, PromptCancelled, RemoteError, ValidationError
from .prompt import MenuItem, Prompt
from .reconcile import reconcile
from .retry import RetryPolicy
from .store import Entry, EntryKind, ParameterStore

CREATE_LABEL = "[+] Create new parameter"
QUIT_LABEL = "[x] Quit"
MENU_MESSAGE = "Select parameter to edit (type to search, Ctrl+C to quit)"


class Action(enum.Enum):
    """Menu items that are not parameters."""

    CREATE = "create"
    QUIT = "quit"


class EditLoop:
    """Main class for the interactive list/select/edit cycle."""

    def __init__(self, store: ParameterStore, prompt: Prompt, prefix: str,
                 secure: bool = False, retry_policy: Optional[RetryPolicy] = None,
                 quiet: bool = False, debug: bool = False):
        """
        Initialize the edit loop.

        Args:
            store: Parameter Store client
            prompt: Interactive prompt implementation
            prefix: Prefix whose direct children are edited
            secure: Mask SecureString values on screen
            retry_policy: Policy wrapping every write (5 attempts, 200ms by default)
            quiet: Suppress status messages
            debug: Report each failed write attempt
        """
        self.store = store
        self.prompt = prompt
        self.prefix = normalize_prefix(prefix)
        self.secure = secure
        self.retry_policy = retry_policy or RetryPolicy()
        self.quiet = quiet
        self.debug = debug
        self.latest_write: Optional[Entry] = None

    def status(self, message: str) -> None:
        if not self.quiet:
            print(message)

    def error(self, message: str) -> None:
        print(message, file=sys.stderr)

    def run(self) -> int:
        """
        Run the loop until the user quits or the listing fails.

        Returns:
            Exit code: 0 after quitting, 1 when parameters cannot be fetched
        """
        while True:
            try:
                entries = self.fetch()
            except RemoteError as e:
                self.error(f"Error fetching parameters: {e}")
                return 1

            try:
                choice = self.select(entries)
            except PromptCancelled:
                self.status("\nQuitting...")
                return 0

            if choice is Action.QUIT:
                self.status("Quitting...")
                return 0
            if choice is Action.CREATE:
                self.create()
            else:
                self.edit(choice)

    def fetch(self) -> List[Entry]:
        """
        Fetch the current listing with the latest local write applied.

        Returns:
            Entries sorted by name

        Raises:
            RemoteError: The store could not be read
        """
        entries = reconcile(self.store.list(self.prefix), self.latest_write)
        if not entries:
            self.status(f"No parameters found under {self.prefix}")
        return entries

    def menu_items(self, entries: List[Entry]) -> List[MenuItem]:
        """
        Build the selection menu: create item, one line per entry, quit item.

        Entries are searched by relative name only; the two fixed items are
        searched by their labels.
        """
        lines = format_entries(entries, self.prefix, self.secure)
        items = [MenuItem(CREATE_LABEL, CREATE_LABEL)]
        items.extend(
            MenuItem(line, relative_name(entry.name, self.prefix))
            for line, entry in zip(lines, entries)
        )
        items.append(MenuItem(QUIT_LABEL, QUIT_LABEL))
        return items

    def select(self, entries: List[Entry]) -> Union[Entry, Action]:
        """
        Ask the user to pick an entry or one of the fixed actions.

        Raises:
            PromptCancelled: The user interrupted the menu
        """
        index = self.prompt.select_one(MENU_MESSAGE, self.menu_items(entries))
        if index == 0:
            return Action.CREATE
        if index == len(entries) + 1:
            return Action.QUIT
        return entries[index - 1]

    def full_name(self, name: str) -> str:
        """Qualify a name typed at the create prompt with the session prefix."""
        if name.startswith(self.prefix):
            return name
        return self.prefix + name.lstrip('/')

    def create(self) -> Optional[Entry]:
        """
        Prompt for a new parameter and create it without overwriting.

        Returns:
            The created Entry, or None when abandoned or failed
        """
        kinds = list(EntryKind)
        try:
            name = self.prompt.read_line("Parameter name").strip()
            if not name:
                self.status("Creation cancelled.")
                return None
            value = self.prompt.read_line("Value", masked=self.secure)
            kind_index = self.prompt.select_one(
                "Parameter type",
                [MenuItem(kind.value, kind.value) for kind in kinds],
            )
        except PromptCancelled:
            self.status("\nCreation cancelled.")
            return None

        return self.persist(self.full_name(name), value, kinds[kind_index], overwrite=False)

    def edit(self, entry: Entry) -> Optional[Entry]:
        """
        Prompt for a replacement value and write it if it changed.

        In secure mode a secret's current value is neither shown nor used to
        pre-fill the input, and typing is masked.

        Returns:
            The written Entry, or None when nothing was written
        """
        masked = self.secure and entry.kind.is_secret
        print(f"Current value: {display_value(entry, self.secure)}")

        try:
            new_value = self.prompt.read_line(
                "New value",
                default='' if masked else entry.value,
                masked=masked,
            )
        except PromptCancelled:
            self.status("\nUpdate cancelled.")
            return None

        if not new_value.strip() or new_value == entry.value:
            self.status("No changes.")
            return None

        return self.persist(entry.name, new_value, entry.kind, overwrite=True)

    def persist(self, name: str, value: str, kind: EntryKind,
                overwrite: bool = True) -> Optional[Entry]:
        """
        Write through the retry policy and remember the result.

        Args:
            name: Fully-qualified parameter name
            value: Value to write
            kind: Parameter type
            overwrite: False when creating

        Returns:
            The written Entry, or None when the write failed
        """
        def attempt_failed(attempt: int, error: Exception) -> None:
            if self.debug:
                self.error(f"Attempt {attempt}/{self.retry_policy.max_attempts} failed: {error}")

        try:
            entry = self.retry_policy.run(
                lambda: self.store.write(name, value, kind, overwrite=overwrite),
                on_failure=attempt_failed,
            )
        except (ValidationError, PersistError) as e:
            self.error(f"Error writing {name}: {e}")
            return None

        self.latest_write = entry
        if overwrite:
            self.status("Parameter updated successfully.")
        else:
            self.status("Parameter created successfully.")
        return entry
