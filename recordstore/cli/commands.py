import json

import click
from flask import current_app
from flask.cli import AppGroup

from ..extensions import get_collection
from ..storage.collection import validate_store_name
from ..storage.dictionary import encode_record
from ..storage.errors import DuplicateKeyError, DuplicateNameError, InvalidNameError, KeyNotFoundError
from ..utils.error_monitor import ErrorMonitor
from .dictionary_cli import DictionaryCLI

stores_cli = AppGroup("stores", help="Create, select and delete record stores.")


def _cli() -> DictionaryCLI:
    return DictionaryCLI(get_collection(), ErrorMonitor(current_app.config.get("ERROR_DUMP_DIR")))


def _require(name: str):
    dictionary = get_collection().get_dictionary(name)
    if dictionary is None:
        raise click.ClickException(f"Dictionary '{name}' does not exist")
    return dictionary


@stores_cli.command("create")
@click.argument("name", required=False)
def create_cmd(name):
    """Create a store (prompts for NAME when omitted)."""
    if name is None:
        if _cli().add_dictionary() is None:
            raise click.exceptions.Exit(1)
        return
    try:
        name = validate_store_name(name, get_collection().path)
        get_collection().create_dictionary(name)
    except (InvalidNameError, DuplicateNameError) as e:
        raise click.ClickException(str(e))
    click.echo(click.style(f"Dictionary '{name}' created.", fg="green"))


@stores_cli.command("select")
def select_cmd():
    """Pick a store, most recently modified last."""
    dictionary = _cli().user_pick()
    if dictionary is not None:
        click.echo(f"Selected dictionary: {dictionary.name} ({len(dictionary)} records)")


@stores_cli.command("delete")
def delete_cmd():
    """Pick a store and delete it after confirmation."""
    _cli().delete_dictionary()


@stores_cli.command("list")
def list_cmd():
    """List stores oldest-modified first."""
    _cli().list_dictionaries()


@stores_cli.command("menu")
def menu_cmd():
    """Interactive create/select/delete/list loop."""
    _cli().run_menu()


@stores_cli.command("show")
@click.argument("name")
def show_cmd(name):
    """Print the records of store NAME as JSON lines."""
    for key, value in _require(name).get_all().items():
        click.echo(encode_record(key, value))


@stores_cli.command("put")
@click.argument("name")
@click.argument("key")
@click.argument("value")
@click.option("--update", "replace", is_flag=True, help="Replace an existing record instead of adding.")
def put_cmd(name, key, value, replace):
    """Add (or with --update, replace) KEY in store NAME; VALUE is JSON."""
    dictionary = _require(name)
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"VALUE is not valid JSON: {e.msg}")
    try:
        if replace:
            dictionary.update(key, parsed)
        else:
            dictionary.add(key, parsed)
    except (DuplicateKeyError, KeyNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))
    click.echo(f"{'Updated' if replace else 'Added'} '{key}' in '{name}'.")


@stores_cli.command("remove")
@click.argument("name")
@click.argument("key")
def remove_cmd(name, key):
    """Delete KEY from store NAME."""
    if not _require(name).delete(key):
        raise click.ClickException(f"Key '{key}' does not exist")
    click.echo(f"Removed '{key}' from '{name}'.")
