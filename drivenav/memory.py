# memory.py
import itertools
import logging
from typing import Dict, List, Optional

from .exceptions import NotFoundError, PermanentError
from .storage.base import StorageClient
from .storage.dto import Node, NodeKind


class InMemoryStorageClient(StorageClient):
    """
    A StorageClient that keeps the whole resource graph in process memory.

    Children and parents are kept as ordered lists so listings are stable,
    and a node may be contained by several folders at once, as in Google Drive.
    """

    def __init__(self, root_id: str = "root", root_name: str = "My Drive"):
        self.root_id = root_id
        self._ids = itertools.count(1)
        self._nodes: Dict[str, Node] = {
            root_id: Node(id=root_id, name=root_name, kind=NodeKind.FOLDER)
        }
        self._children: Dict[str, List[str]] = {root_id: []}
        self._parents: Dict[str, List[str]] = {root_id: []}

    def _new_id(self, kind: NodeKind) -> str:
        return f"{kind.value}-{next(self._ids)}"

    def _folder(self, folder_id: str) -> Node:
        folder = self.by_id(folder_id)
        if not folder.is_folder:
            raise PermanentError(f"Node '{folder_id}' exists but is not a folder.")
        return folder

    def _insert(self, node: Node, parent_id: str) -> Node:
        self._nodes[node.id] = node
        self._parents[node.id] = []
        if node.is_folder:
            self._children[node.id] = []
        self.add_parent(node.id, parent_id)
        return node

    def _is_ancestor(self, candidate_id: str, node_id: str) -> bool:
        """True if `candidate_id` is `node_id` or any folder containing it, transitively."""
        pending = [node_id]
        seen = set()
        while pending:
            current = pending.pop()
            if current == candidate_id:
                return True
            if current in seen:
                continue
            seen.add(current)
            pending.extend(self._parents.get(current, []))
        return False

    def add_file(
        self, name: str, content: bytes = b"", parent_id: Optional[str] = None
    ) -> Node:
        """Creates a file holding `content`, at the root unless `parent_id` is given."""
        self._folder(parent_id or self.root_id)
        node = Node(
            id=self._new_id(NodeKind.FILE), name=name, kind=NodeKind.FILE, content=content
        )
        return self._insert(node, parent_id or self.root_id)

    def children(self, folder_id: str, kind: NodeKind) -> List[Node]:
        self.by_id(folder_id)
        return [
            self._nodes[child_id]
            for child_id in self._children.get(folder_id, [])
            if self._nodes[child_id].kind == kind
        ]

    def parents(self, node_id: str) -> List[Node]:
        self.by_id(node_id)
        return [self._nodes[parent_id] for parent_id in self._parents[node_id]]

    def by_id(self, node_id: str) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NotFoundError(f"Node with ID '{node_id}' not found.") from None

    def by_name_top_level(
        self, name: str, kind: Optional[NodeKind] = None
    ) -> List[Node]:
        return [
            node
            for node_id, node in self._nodes.items()
            if node_id != self.root_id
            and node.name == name
            and (kind is None or node.kind == kind)
        ]

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> Node:
        parent_id = parent_id or self.root_id
        self._folder(parent_id)
        node = Node(id=self._new_id(NodeKind.FOLDER), name=name, kind=NodeKind.FOLDER)
        logging.info(f"Created folder '{name}' with ID: {node.id}")
        return self._insert(node, parent_id)

    def copy_file(self, file_id: str, name: str, parent_id: str) -> Node:
        source = self.by_id(file_id)
        if source.is_folder:
            raise PermanentError(f"Node '{file_id}' is a folder and cannot be copied as a file.")
        self._folder(parent_id)
        node = Node(
            id=self._new_id(NodeKind.FILE),
            name=name,
            kind=NodeKind.FILE,
            content=source.content,
            mime_type=source.mime_type,
        )
        return self._insert(node, parent_id)

    def add_parent(self, node_id: str, folder_id: str):
        self.by_id(node_id)
        self._folder(folder_id)
        if self._is_ancestor(node_id, folder_id):
            raise PermanentError(
                f"Adding '{node_id}' to folder '{folder_id}' would create a cycle."
            )
        if folder_id not in self._parents[node_id]:
            self._parents[node_id].append(folder_id)
            self._children[folder_id].append(node_id)

    def remove_parent(self, node_id: str, folder_id: str):
        self.by_id(node_id)
        if folder_id not in self._parents[node_id]:
            raise NotFoundError(f"Folder '{folder_id}' does not contain '{node_id}'.")
        self._parents[node_id].remove(folder_id)
        self._children[folder_id].remove(node_id)
