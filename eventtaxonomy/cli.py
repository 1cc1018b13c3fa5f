"""
Command-line interface for inspecting the event type taxonomy.

Renders the hierarchy and runs description derivation for ad-hoc records,
which is handy when checking how a stored event will be displayed.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .attributes import InMemoryRecordStore, Record
from .config import TaxonomySettings
from .errors import RecordLookupError
from .hierarchy import format_type_path, format_type_tree
from .models import EventDescription
from .nodes import EventTypeNode, LeafEventType
from .registry import REGISTRY, TypeRegistry, build_registry

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def resolve_type(registry: TypeRegistry, name: str) -> EventTypeNode:
    """
    Find a type by id, symbolic key or display name.

    Args:
        registry: Registry to search
        name: "11", "WEB_HISTORY", "web_history" or "Web History"

    Raises:
        click.BadParameter: If nothing matches
    """
    if name.isdigit():
        node = registry.get(int(name))
    else:
        node = registry.by_key(name.upper())
        if node is None:
            node = next(
                (t for t in registry if t.display_name.lower() == name.lower()), None
            )
    if node is None:
        raise click.BadParameter(f"Unknown event type: {name}", param_hint="TYPE")
    return node


def parse_attributes(pairs: Tuple[str, ...]) -> Dict[str, str]:
    """
    Parse NAME=VALUE pairs into an attribute bag.

    Raises:
        click.BadParameter: If a pair has no "="
    """
    attributes = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(
                f"Invalid attribute '{pair}'. Use NAME=VALUE.", param_hint="--attr"
            )
        attributes[name.strip().upper()] = value
    return attributes


def display_description(node: EventTypeNode, description: EventDescription) -> None:
    table = Table(title=format_type_path(node, " > "), show_header=True)
    table.add_column("Level", style="cyan")
    table.add_column("Description")
    table.add_row("full", Text(description.full))
    table.add_row("medium", Text(description.medium))
    table.add_row("short", Text(description.short))
    console.print(table)


def emit_description(node: EventTypeNode, description: EventDescription, as_json: bool) -> None:
    if as_json:
        click.echo(description.model_dump_json())
    else:
        display_description(node, description)


@click.group()
@click.option(
    "--labels",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file of display-name overrides",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (defaults to $EVENTTAXONOMY_LOG_LEVEL or WARNING)",
)
@click.pass_context
def main(ctx: click.Context, labels: Optional[Path], log_level: Optional[str]):
    """
    Inspect the timeline event type hierarchy.

    Examples:

        eventtaxonomy tree

        eventtaxonomy describe WEB_HISTORY --attr TSK_URL=https://example.com/a

        eventtaxonomy parse FILE_MODIFIED /home/user/report.pdf
    """
    try:
        settings = TaxonomySettings.from_env(labels_path=labels, log_level=log_level)
    except ValidationError as e:
        raise click.UsageError(str(e))

    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )

    if settings.labels_path:
        ctx.obj = build_registry(settings.display_names())
    else:
        ctx.obj = REGISTRY


@main.command()
@click.option("--root", "root_name", default=None, help="Draw only the subtree of this type")
@click.pass_obj
def tree(registry: TypeRegistry, root_name: Optional[str]):
    """Draw the type hierarchy."""
    root = resolve_type(registry, root_name) if root_name else registry.root
    console.print(
        Panel(Text(format_type_tree(root)), title="Event Types", border_style="blue")
    )


@main.command("types")
@click.option("--base", "base_name", default=None, help="List only the sub types of this base type")
@click.pass_obj
def list_types(registry: TypeRegistry, base_name: Optional[str]):
    """List event types with their ids."""
    if base_name:
        types = resolve_type(registry, base_name).sub_types()
    else:
        types = registry.all_types()

    table = Table(show_header=True)
    table.add_column("Id", justify="right")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Level")
    table.add_column("Base")
    for t in types:
        table.add_row(
            str(t.id), t.key, t.display_name, t.level.name, t.base_type().key
        )
    console.print(table)


@main.command()
@click.argument("type_name", metavar="TYPE")
@click.option("--attr", "attrs", multiple=True, help="Attribute as NAME=VALUE (repeatable)")
@click.option("--path", default=None, help="Inherent path of a file-system event")
@click.option("--object-id", type=int, default=0, help="Object id of the record")
@click.option("--file-name", default=None, help="Name of the file behind --object-id")
@click.option("--json", "as_json", is_flag=True, help="Print the description as JSON")
@click.pass_obj
def describe(
    registry: TypeRegistry,
    type_name: str,
    attrs: Tuple[str, ...],
    path: Optional[str],
    object_id: int,
    file_name: Optional[str],
    as_json: bool,
):
    """Derive the descriptions of a record of type TYPE."""
    node = resolve_type(registry, type_name)
    if not isinstance(node, LeafEventType):
        raise click.BadParameter(
            f"{node.key} is a {node.level.name} type and has no descriptions",
            param_hint="TYPE",
        )

    record = Record(object_id=object_id, path=path, attributes=parse_attributes(attrs))

    logger.debug(f"Deriving {node.key} descriptions for object {object_id}")
    store = InMemoryRecordStore({object_id: file_name} if file_name is not None else {})
    try:
        description = node.derive(record, store)
    except RecordLookupError as e:
        if e.partial is not None:
            emit_description(node, e.partial, as_json)
        raise click.ClickException(f"Lookup failed: {e}")

    emit_description(node, description, as_json)


@main.command()
@click.argument("type_name", metavar="TYPE")
@click.argument("full")
@click.argument("medium", required=False, default="")
@click.argument("short", required=False, default="")
@click.option("--json", "as_json", is_flag=True, help="Print the description as JSON")
@click.pass_obj
def parse(
    registry: TypeRegistry,
    type_name: str,
    full: str,
    medium: str,
    short: str,
    as_json: bool,
):
    """Rebuild a stored description of type TYPE."""
    node = resolve_type(registry, type_name)
    emit_description(node, node.parse_description(full, medium, short), as_json)


if __name__ == "__main__":
    main()
