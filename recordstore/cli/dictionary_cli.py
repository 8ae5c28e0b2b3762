from datetime import datetime
from typing import List, Optional, Tuple

import click

from ..storage.collection import DictionaryCollection, validate_store_name
from ..storage.dictionary import Dictionary
from ..storage.errors import DuplicateNameError, InvalidNameError
from ..utils.error_monitor import ErrorMonitor, error_monitored
from ..utils.fs_utils import render_path

MENU_ACTIONS = ("create", "select", "delete", "list", "exit")


def _fmt_mtime(mtime: Optional[datetime]) -> str:
    return mtime.strftime("%Y-%m-%d %H:%M:%S") if mtime else "never"


class DictionaryCLI:
    """Interactive prompts over a DictionaryCollection."""

    def __init__(self, collection: DictionaryCollection, monitor: Optional[ErrorMonitor] = None):
        self.collection = collection
        self.monitor = monitor or ErrorMonitor()

    def _validate_name(self, value: str) -> str:
        try:
            return validate_store_name(value, self.collection.path)
        except InvalidNameError as e:
            raise click.BadParameter(str(e))

    def add_dictionary(self) -> Optional[Dictionary]:
        name = click.prompt("Enter the name for the new dictionary", value_proc=self._validate_name)
        try:
            dictionary = self.collection.add_dictionary(name)
        except DuplicateNameError as e:
            click.echo(click.style(str(e), fg="red"))
            return None
        click.echo(click.style(f"Dictionary '{name}' created.", fg="green"))
        return dictionary

    def delete_dictionary(self) -> bool:
        key = self.user_pick_key()
        if not key:
            return False
        if not click.confirm(f"Are you sure you want to delete the dictionary '{key}'?", default=False):
            return False
        if self.collection.delete_dictionary(key):
            click.echo(click.style(f"Dictionary '{key}' deleted successfully.", fg="green"))
            return True
        click.echo(click.style(f"Failed to delete dictionary '{key}'.", fg="red"))
        return False

    def sorted_entries(self) -> List[Tuple[str, Dictionary]]:
        """Stores ordered oldest-modified first; stores without a file come first."""

        def sort_key(item):
            name, dictionary = item
            return (dictionary.modified_at() or datetime.min, name)

        return sorted(self.collection.get_all_dictionaries().items(), key=sort_key)

    def user_pick_key(self) -> Optional[str]:
        entries = self.sorted_entries()
        if not entries:
            click.echo(click.style("No dictionaries available.", fg="yellow"))
            return None

        names = [name for name, _ in entries]
        for idx, (name, dictionary) in enumerate(entries, start=1):
            click.echo(f"  {idx}) {name} (Last modified: {_fmt_mtime(dictionary.modified_at())})")

        def _choice(value: str) -> str:
            value = str(value).strip()
            if value in names:
                return value
            if value.isdigit() and 1 <= int(value) <= len(names):
                return names[int(value) - 1]
            raise click.BadParameter(f"'{value}' is not one of the listed dictionaries")

        return click.prompt("Select a dictionary", value_proc=_choice)

    def user_pick(self) -> Optional[Dictionary]:
        key = self.user_pick_key()
        if key:
            return self.collection.get_dictionary(key)
        return None

    def list_dictionaries(self) -> List[str]:
        entries = self.sorted_entries()
        if not entries:
            click.echo(click.style("No dictionaries available.", fg="yellow"))
            return []
        click.echo(f"Dictionaries in {render_path(self.collection.path)}:")
        for name, dictionary in entries:
            click.echo(f"{name}\t{len(dictionary)} records\t{_fmt_mtime(dictionary.modified_at())}")
        return [name for name, _ in entries]

    @error_monitored()
    def run_menu(self):
        while True:
            try:
                action = click.prompt(
                    "Action",
                    type=click.Choice(MENU_ACTIONS, case_sensitive=False),
                    default="exit",
                    show_choices=True,
                ).lower()
            except click.Abort:
                break
            self.monitor.add_context({"action": action, "dictionaries": self.collection.names()})
            if action == "exit":
                break
            try:
                if action == "create":
                    self.add_dictionary()
                elif action == "select":
                    dictionary = self.user_pick()
                    if dictionary is not None:
                        click.echo(f"Selected dictionary: {dictionary.name} ({len(dictionary)} records)")
                elif action == "delete":
                    self.delete_dictionary()
                elif action == "list":
                    self.list_dictionaries()
            except click.Abort:
                break
