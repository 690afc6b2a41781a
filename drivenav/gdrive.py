# gdrive.py
import logging
import json
import io

from .storage.base import StorageClient
from .storage.dto import FOLDER_MIME_TYPE, Node, NodeKind
from typing import List, Optional
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload
from .exceptions import NotFoundError, TransientIOError

NODE_FIELDS = "id, name, mimeType"
PDF_MIME_TYPE = "application/pdf"


def _escape(value: str) -> str:
    """Escapes a literal for use inside a single-quoted Drive query string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _to_node(item: dict) -> Node:
    mime_type = item.get("mimeType")
    return Node(
        id=item["id"],
        name=item["name"],
        kind=NodeKind.FOLDER if mime_type == FOLDER_MIME_TYPE else NodeKind.FILE,
        mime_type=mime_type,
    )


class GoogleDriveClient(StorageClient):
    """
    Client for interacting with the Google Drive API, implementing the StorageClient interface.
    """

    def __init__(self, credentials_json: str, token_json: str, page_size: int = 1000):
        try:
            token_info = json.loads(token_json)

            # The credentials_json can come from a file or environment variable.
            # It should contain the client_id and client_secret.
            credentials_data = json.loads(credentials_json)
            # Downloaded OAuth client files nest the secrets under "installed" or "web".
            credentials_data = credentials_data.get(
                "installed", credentials_data.get("web", credentials_data)
            )

            creds = Credentials.from_authorized_user_info(info=token_info)

            if "client_id" in credentials_data and "client_secret" in credentials_data:
                creds.client_id = credentials_data["client_id"]
                creds.client_secret = credentials_data["client_secret"]
            else:
                logging.warning(
                    "client_id or client_secret not found in GDRIVE_CREDENTIALS_JSON. Using existing from token_json if available."
                )

            self.service = build("drive", "v3", credentials=creds)
            self.page_size = page_size
            logging.info("Google Drive client initialized successfully.")
        except Exception as e:
            logging.error(f"Failed to initialize Google Drive client. Error: {e}")
            raise

    def _execute(self, request, action: str):
        """
        Executes an API request, translating HttpError into the domain error kinds.
        """
        try:
            return request.execute()
        except HttpError as e:
            if e.resp.status == 404:
                raise NotFoundError(f"Not found while trying to {action}.") from e
            logging.error(f"Failed to {action}: {e}")
            raise TransientIOError(f"API error while trying to {action}: {e}") from e

    def _list(self, query: str, action: str) -> List[Node]:
        """Runs a files().list query, following pagination until exhausted."""
        nodes = []
        page_token = None
        while True:
            response = self._execute(
                self.service.files().list(
                    q=query,
                    fields=f"nextPageToken, files({NODE_FIELDS})",
                    pageSize=self.page_size,
                    pageToken=page_token,
                ),
                action,
            )
            nodes.extend(_to_node(item) for item in response.get("files", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                return nodes

    def children(self, folder_id: str, kind: NodeKind) -> List[Node]:
        operator = "=" if kind == NodeKind.FOLDER else "!="
        query = (
            f"'{_escape(folder_id)}' in parents and trashed=false and "
            f"mimeType {operator} '{FOLDER_MIME_TYPE}'"
        )
        return self._list(query, f"list {kind.value} children of folder '{folder_id}'")

    def parents(self, node_id: str) -> List[Node]:
        item = self._execute(
            self.service.files().get(fileId=node_id, fields="parents"),
            f"get parents of '{node_id}'",
        )
        return [self.by_id(parent_id) for parent_id in item.get("parents", [])]

    def by_id(self, node_id: str) -> Node:
        item = self._execute(
            self.service.files().get(fileId=node_id, fields=NODE_FIELDS),
            f"get node '{node_id}'",
        )
        return _to_node(item)

    def by_name_top_level(
        self, name: str, kind: Optional[NodeKind] = None
    ) -> List[Node]:
        query = f"name='{_escape(name)}' and trashed=false"
        if kind is not None:
            operator = "=" if kind == NodeKind.FOLDER else "!="
            query += f" and mimeType {operator} '{FOLDER_MIME_TYPE}'"
        return self._list(query, f"search for '{name}'")

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> Node:
        folder_metadata = {"name": name, "mimeType": FOLDER_MIME_TYPE}
        if parent_id:
            folder_metadata["parents"] = [parent_id]
        folder = self._execute(
            self.service.files().create(body=folder_metadata, fields=NODE_FIELDS),
            f"create folder '{name}'",
        )
        logging.info(f"Created folder '{name}' with ID: {folder['id']}")
        return _to_node(folder)

    def copy_file(self, file_id: str, name: str, parent_id: str) -> Node:
        copied = self._execute(
            self.service.files().copy(
                fileId=file_id,
                body={"name": name, "parents": [parent_id]},
                fields=NODE_FIELDS,
            ),
            f"copy file '{file_id}' to folder '{parent_id}'",
        )
        logging.info(f"Copied file '{name}' to folder ID {parent_id} as {copied['id']}")
        return _to_node(copied)

    def add_parent(self, node_id: str, folder_id: str):
        self._execute(
            self.service.files().update(
                fileId=node_id, addParents=folder_id, fields="id, parents"
            ),
            f"add '{node_id}' to folder '{folder_id}'",
        )

    def remove_parent(self, node_id: str, folder_id: str):
        self._execute(
            self.service.files().update(
                fileId=node_id, removeParents=folder_id, fields="id, parents"
            ),
            f"remove '{node_id}' from folder '{folder_id}'",
        )

    def url_for(self, node: Node) -> str:
        if node.is_folder:
            return f"https://drive.google.com/drive/folders/{node.id}"
        return f"https://drive.google.com/file/d/{node.id}/view"

    def export_pdf(self, file_id: str, local_path: str):
        """
        Exports a Google Docs/Sheets/Slides file as PDF to the local filesystem.
        """
        logging.info(f"Exporting file with ID '{file_id}' as PDF to {local_path}...")
        request = self.service.files().export_media(fileId=file_id, mimeType=PDF_MIME_TYPE)
        try:
            with io.FileIO(str(local_path), "wb") as fh:
                downloader = MediaIoBaseDownload(fh, request)
                done = False
                while not done:
                    status, done = downloader.next_chunk()
        except HttpError as e:
            if e.resp.status == 404:
                raise NotFoundError(
                    f"File with ID '{file_id}' not found in Google Drive."
                ) from e
            logging.error(f"Failed to export file with ID '{file_id}': {e}")
            raise TransientIOError(f"API error while exporting '{file_id}': {e}") from e
