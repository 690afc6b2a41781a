# subtree.py
import logging

from .storage.base import StorageClient
from .storage.dto import NodeKind


def copy_subtree(
    storage_client: StorageClient, source_folder_id: str, destination_folder_id: str
):
    """
    Recursively copies the contents of a folder into a destination folder.

    Files at each level are copied before descending into subfolders. Every
    copy gets a new ID. The copy never merges: running it twice against the
    same destination yields two independent same-named subtrees. Nodes created
    before a failure are left in place.
    """
    for file in storage_client.children(source_folder_id, NodeKind.FILE):
        storage_client.copy_file(file.id, file.name, destination_folder_id)

    for subfolder in storage_client.children(source_folder_id, NodeKind.FOLDER):
        new_folder = storage_client.create_folder(subfolder.name, destination_folder_id)
        logging.info(
            f"Copying folder '{subfolder.name}' ({subfolder.id}) into {new_folder.id}"
        )
        copy_subtree(storage_client, subfolder.id, new_folder.id)
