# storage/dto.py
from enum import Enum
from pydantic import BaseModel
from typing import Optional

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


class NodeKind(str, Enum):
    FILE = "file"
    FOLDER = "folder"


class Node(BaseModel):
    """
    A standardized Data Transfer Object for a file or folder, abstracting away
    provider-specific resource representations.
    """

    id: str
    name: str
    kind: NodeKind
    content: Optional[bytes] = None
    mime_type: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return self.kind == NodeKind.FOLDER
