# storage/base.py
from abc import ABC, abstractmethod
from typing import List, Optional
from .dto import Node, NodeKind


class StorageClient(ABC):
    """
    Abstract base class for a hierarchical storage client.
    Defines the common interface that all specific storage clients
    (e.g., Google Drive, in-memory) must implement.

    Containment is a DAG: a node may sit in several folders at once, so
    `parents` always returns a list.
    """

    @abstractmethod
    def children(self, folder_id: str, kind: NodeKind) -> List[Node]:
        """
        Lists the direct children of a folder, filtered by kind.

        :param folder_id: The ID of the folder to list.
        :param kind: Only children of this kind are returned.
        :return: Child nodes in the provider's listing order.
        """
        pass

    @abstractmethod
    def parents(self, node_id: str) -> List[Node]:
        """
        Lists every folder that currently contains a node.

        :param node_id: The ID of the node.
        :return: Zero, one or many parent folders.
        """
        pass

    @abstractmethod
    def by_id(self, node_id: str) -> Node:
        """
        Resolves a node by its ID.
        Raises NotFoundError if the node does not exist.

        :param node_id: The ID of the node.
        """
        pass

    @abstractmethod
    def by_name_top_level(
        self, name: str, kind: Optional[NodeKind] = None
    ) -> List[Node]:
        """
        Returns every node in the whole namespace with exactly this name,
        ignoring containment.

        :param name: The exact name to look up.
        :param kind: Optional filter on the node kind.
        """
        pass

    @abstractmethod
    def create_folder(self, name: str, parent_id: Optional[str] = None) -> Node:
        """
        Creates a new folder.

        :param name: The name of the new folder.
        :param parent_id: The containing folder; the namespace root when omitted.
        """
        pass

    @abstractmethod
    def copy_file(self, file_id: str, name: str, parent_id: str) -> Node:
        """
        Creates an independent copy of a file (new ID, same content).

        :param file_id: The ID of the file to copy.
        :param name: The name for the copy.
        :param parent_id: The ID of the folder receiving the copy.
        """
        pass

    @abstractmethod
    def add_parent(self, node_id: str, folder_id: str):
        """Adds a containment edge from `folder_id` to `node_id`."""
        pass

    @abstractmethod
    def remove_parent(self, node_id: str, folder_id: str):
        """Removes the containment edge from `folder_id` to `node_id`."""
        pass

    def url_for(self, node: Node) -> str:
        """Returns a link to the node; providers without links return its ID."""
        return node.id
