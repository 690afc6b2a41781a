# search.py
import logging
from typing import Optional

from .exceptions import NotFoundError
from .storage.base import StorageClient
from .storage.dto import Node, NodeKind


def _matches(node: Node, name: str, partial_match: bool) -> bool:
    return node.name == name or (partial_match and name in node.name)


def _search(
    storage_client: StorageClient,
    folder_id: str,
    name: str,
    target_kind: NodeKind,
    partial_match: bool,
) -> Optional[Node]:
    """Depth-first search below one folder. Returns None when nothing matches."""
    if target_kind == NodeKind.FILE:
        for file in storage_client.children(folder_id, NodeKind.FILE):
            if _matches(file, name, partial_match):
                return file

    subfolders = storage_client.children(folder_id, NodeKind.FOLDER)

    if target_kind == NodeKind.FOLDER:
        # Folders only ever match on the exact name.
        for subfolder in subfolders:
            if subfolder.name == name:
                return subfolder

    for subfolder in subfolders:
        found = _search(storage_client, subfolder.id, name, target_kind, partial_match)
        if found is not None:
            return found

    return None


def search_by_name(
    storage_client: StorageClient,
    root_id: str,
    name: str,
    target_kind: NodeKind = NodeKind.FILE,
    partial_match: bool = False,
) -> Optional[Node]:
    """Same traversal as `find_by_name`, but returns None when nothing matches."""
    return _search(storage_client, root_id, name, target_kind, partial_match)


def find_by_name(
    storage_client: StorageClient,
    root_id: str,
    name: str,
    target_kind: NodeKind = NodeKind.FILE,
    partial_match: bool = False,
) -> Node:
    """
    Searches recursively below `root_id` for a file or folder called `name`.

    The first match in depth-first order wins; later nodes with the same name
    are never visited. `partial_match` only applies to files, where `name`
    may then be any substring of the file name.

    Raises:
        NotFoundError: If nothing in the subtree matches.
    """
    logging.info(
        f"Searching for {target_kind.value} '{name}' under folder ID '{root_id}'..."
    )
    found = search_by_name(storage_client, root_id, name, target_kind, partial_match)
    if found is None:
        raise NotFoundError(
            f"No {target_kind.value} named '{name}' found under folder ID '{root_id}'."
        )
    logging.info(f"Found {target_kind.value} '{found.name}' with ID: {found.id}")
    return found


def get_file_id(storage_client: StorageClient, folder_id: str, file_name: str) -> str:
    """Returns the ID of the first file called `file_name` below `folder_id`."""
    return find_by_name(storage_client, folder_id, file_name, NodeKind.FILE).id


def get_folder_id(storage_client: StorageClient, folder_id: str, folder_name: str) -> str:
    """Returns the ID of the first folder called `folder_name` below `folder_id`."""
    return find_by_name(storage_client, folder_id, folder_name, NodeKind.FOLDER).id
