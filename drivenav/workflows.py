# workflows.py
import logging

from .move import move_by_id
from .search import get_file_id, get_folder_id
from .storage.base import StorageClient
from .storage.dto import NodeKind
from .subtree import copy_subtree


def generate_project_folder(
    storage_client: StorageClient,
    source_folder_name: str,
    destination_folder_id: str,
    template_folder_name: str,
) -> dict:
    """
    Creates a new project folder from a template and files it under a destination.

    The template is looked up by name across the whole drive; when several
    folders share the name the first one is used, and when none exists the
    project folder is created empty.
    """
    destination = storage_client.by_id(destination_folder_id)
    templates = storage_client.by_name_top_level(template_folder_name, NodeKind.FOLDER)
    project = storage_client.create_folder(source_folder_name)

    if templates:
        logging.info(
            f"Copying template '{template_folder_name}' ({templates[0].id}) into '{source_folder_name}'"
        )
        copy_subtree(storage_client, templates[0].id, project.id)
    else:
        logging.warning(
            f"Template folder '{template_folder_name}' not found. Project folder left empty."
        )

    move_by_id(storage_client, project.id, destination.id)
    return {"id": project.id, "url": storage_client.url_for(project)}


def locate_file_id(
    storage_client: StorageClient, folder_id: str, folder_name: str, file_name: str
) -> str:
    """Finds subfolder `folder_name` below `folder_id`, then the file `file_name` inside it."""
    sub_folder_id = get_folder_id(storage_client, folder_id, folder_name)
    return get_file_id(storage_client, sub_folder_id, file_name)
