# move.py
import logging

from .exceptions import AmbiguousNameError, CollisionError, CycleError, NotFoundError
from .search import search_by_name
from .storage.base import StorageClient
from .storage.dto import Node, NodeKind


def _check_no_cycle(storage_client: StorageClient, source: Node, destination: Node):
    """Raises CycleError if `destination` is `source` or lies anywhere below it."""
    if destination.id == source.id:
        raise CycleError(f"Cannot move '{source.name}' ({source.id}) into itself.")
    if not source.is_folder:
        return

    pending = [destination.id]
    seen = set()
    while pending:
        current = pending.pop()
        if current in seen:
            continue
        seen.add(current)
        for parent in storage_client.parents(current):
            if parent.id == source.id:
                raise CycleError(
                    f"Cannot move '{source.name}' ({source.id}) into its own descendant "
                    f"'{destination.name}' ({destination.id})."
                )
            pending.append(parent.id)


def _reparent(storage_client: StorageClient, source: Node, destination: Node) -> Node:
    """Detaches `source` from every current parent, then attaches it to `destination`."""
    _check_no_cycle(storage_client, source, destination)
    for parent in storage_client.parents(source.id):
        storage_client.remove_parent(source.id, parent.id)
    storage_client.add_parent(source.id, destination.id)
    logging.info(
        f"Moved '{source.name}' ({source.id}) to folder '{destination.name}' ({destination.id})"
    )
    return source


def move_by_id(storage_client: StorageClient, source_id: str, destination_id: str) -> Node:
    """
    Moves a node into a folder and removes it from all other folders
    that previously contained it.

    No name checks are made; the caller is responsible for the IDs. Moving a
    folder into itself or one of its descendants raises CycleError before
    any parent is changed.
    """
    source = storage_client.by_id(source_id)
    destination = storage_client.by_id(destination_id)
    return _reparent(storage_client, source, destination)


def move_by_name(
    storage_client: StorageClient,
    source_name: str,
    destination_name: str,
    unique: bool = False,
) -> Node:
    """
    Moves a folder, looked up by name, into another folder looked up by name.

    The destination name must always be unique. The source name only has to
    be unique when `unique` is set; otherwise the first match is moved.
    Every check runs before any parent is changed.

    Raises:
        NotFoundError: If either name matches no folder.
        AmbiguousNameError: If a name that must be unique matches several folders.
        CollisionError: If the destination already holds a folder named `source_name`.
        CycleError: If the destination lies inside the source folder.
    """
    sources = storage_client.by_name_top_level(source_name, NodeKind.FOLDER)
    if not sources:
        raise NotFoundError(f"Source folder '{source_name}' not found.")
    if unique and len(sources) > 1:
        raise AmbiguousNameError("source", source_name)

    destinations = storage_client.by_name_top_level(destination_name, NodeKind.FOLDER)
    if not destinations:
        raise NotFoundError(f"Destination folder '{destination_name}' not found.")
    if len(destinations) > 1:
        raise AmbiguousNameError("destination", destination_name)
    destination = destinations[0]

    for child in storage_client.children(destination.id, NodeKind.FOLDER):
        if child.name == source_name:
            raise CollisionError(
                f"Source folder name '{source_name}' not unique in destination folder '{destination_name}'"
            )

    return _reparent(storage_client, sources[0], destination)


def find_or_create(
    storage_client: StorageClient, parent_id: str, name: str, move_to: bool = False
) -> Node:
    """
    Finds the folder `name` below `parent_id`, or creates it at the root.
    With `move_to`, the folder is then moved directly under `parent_id`.

    Raises:
        NotFoundError: If `parent_id` does not exist; nothing is created.
    """
    parent = storage_client.by_id(parent_id)

    folder = search_by_name(storage_client, parent.id, name, NodeKind.FOLDER)
    if folder is None:
        logging.info(f"Folder '{name}' not found under '{parent_id}'. Creating it.")
        folder = storage_client.create_folder(name)

    if move_to:
        folder = _reparent(storage_client, folder, parent)

    return folder
