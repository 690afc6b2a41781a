# main.py
"""
Command-line entry point.

With STORAGE_PROVIDER=memory every invocation starts from a new, empty
in-memory drive, and whatever a command changes is gone when it exits.
That provider is only useful for trying out the commands.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

from .config import get_settings
from .exceptions import PermanentError, TransientError
from .fetch import fetch_pdfs
from .gdrive import GoogleDriveClient
from .memory import InMemoryStorageClient
from .move import find_or_create, move_by_id, move_by_name
from .search import find_by_name
from .storage.base import StorageClient
from .storage.dto import Node, NodeKind
from .subtree import copy_subtree
from .workflows import generate_project_folder, locate_file_id
from .utils import flatten_object, object_to_csv, unique


def setup_logging():
    """Configures logging to file and console explicitly."""
    settings = get_settings()
    log_level_name = settings.LOG_LEVEL.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level_name)

    # Clear any existing handlers to prevent duplicate logs on re-runs or implicit configs
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Console output goes to stderr so stdout stays clean for JSON results.
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    try:
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except IOError as e:
        root_logger.error(f"Failed to set up file logging to {settings.LOG_FILE}: {e}")

    # Reducing "noise" from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)


def _init_gdrive_client(settings) -> Optional[GoogleDriveClient]:
    """Initializes and returns a GoogleDriveClient."""
    try:
        return GoogleDriveClient(
            credentials_json=settings.GDRIVE_CREDENTIALS_JSON,
            token_json=settings.GDRIVE_TOKEN_JSON,
            page_size=settings.GDRIVE_PAGE_SIZE,
        )
    except Exception as e:
        logging.error(
            f"Failed to initialize Google Drive client. Error: {e}", exc_info=True
        )
        return None


def initialize_storage_client(settings) -> Tuple[Optional[StorageClient], str]:
    """
    Initializes and returns the appropriate storage client based on settings.

    Returns a tuple of (storage_client, root_folder_id).
    """
    if settings.STORAGE_PROVIDER == "gdrive":
        logging.info("Using Google Drive storage provider.")
        return _init_gdrive_client(settings), settings.GDRIVE_ROOT_FOLDER_ID

    if settings.STORAGE_PROVIDER == "memory":
        logging.info("Using in-memory storage provider.")
        storage_client = InMemoryStorageClient()
        return storage_client, storage_client.root_id

    logging.critical(f"Unknown STORAGE_PROVIDER: {settings.STORAGE_PROVIDER}")
    return None, ""


def _node_json(node: Node) -> dict:
    return node.model_dump(mode="json", exclude={"content"})


def _run_command(args, storage_client: StorageClient, root_id: str):
    """Dispatches one parsed CLI command and returns its JSON-serializable result."""
    command = args.command

    if command == "find":
        kind = NodeKind.FOLDER if args.folder else NodeKind.FILE
        return _node_json(
            find_by_name(storage_client, args.root_id or root_id, args.name, kind, args.partial)
        )
    if command == "copy":
        copy_subtree(storage_client, args.source_id, args.destination_id)
        return {"copied": args.source_id, "into": args.destination_id}
    if command == "move":
        return _node_json(move_by_id(storage_client, args.source_id, args.destination_id))
    if command == "move-by-name":
        return _node_json(
            move_by_name(
                storage_client, args.source_name, args.destination_name, unique=args.unique
            )
        )
    if command == "find-or-create":
        return _node_json(
            find_or_create(storage_client, args.parent_id, args.name, move_to=args.move_to)
        )
    if command == "generate-project":
        return generate_project_folder(
            storage_client, args.name, args.destination_id, args.template
        )
    if command == "locate-file":
        return {
            "id": locate_file_id(
                storage_client, args.folder_id, args.folder_name, args.file_name
            )
        }
    if command == "export-pdf":
        if not isinstance(storage_client, GoogleDriveClient):
            raise PermanentError("PDF export is only available for the gdrive provider.")
        storage_client.export_pdf(args.file_id, args.output)
        return {"id": args.file_id, "path": str(args.output)}

    raise ValueError(f"Unknown command: {command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drivenav",
        description="Find, copy and move folders and files in Google Drive.",
        epilog=(
            "With STORAGE_PROVIDER=memory each run starts from an empty in-memory "
            "drive and nothing is kept after the command exits."
        ),
    )
    parser.add_argument(
        "--format",
        choices=("json", "csv"),
        default="json",
        help="Output format for the result (default: json).",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    find = commands.add_parser("find", help="Find a file or folder by name.")
    find.add_argument("name")
    find.add_argument("--root-id", help="Folder to search from (default: configured root).")
    find.add_argument("--folder", action="store_true", help="Search for a folder instead of a file.")
    find.add_argument("--partial", action="store_true", help="Allow partial file name matches.")

    copy = commands.add_parser("copy", help="Copy a folder's contents into another folder.")
    copy.add_argument("source_id")
    copy.add_argument("destination_id")

    move = commands.add_parser("move", help="Move a node into a folder by ID.")
    move.add_argument("source_id")
    move.add_argument("destination_id")

    move_name = commands.add_parser("move-by-name", help="Move a folder into a folder by name.")
    move_name.add_argument("source_name")
    move_name.add_argument("destination_name")
    move_name.add_argument("--unique", action="store_true", help="Require the source name to be unique.")

    find_create = commands.add_parser("find-or-create", help="Find a folder or create it.")
    find_create.add_argument("parent_id")
    find_create.add_argument("name")
    find_create.add_argument("--move-to", action="store_true", help="Move the folder under the parent.")

    project = commands.add_parser("generate-project", help="Create a project folder from a template.")
    project.add_argument("name")
    project.add_argument("destination_id")
    project.add_argument("template")

    locate = commands.add_parser("locate-file", help="Locate a file inside a named subfolder.")
    locate.add_argument("folder_id")
    locate.add_argument("folder_name")
    locate.add_argument("file_name")

    export = commands.add_parser("export-pdf", help="Export a Drive document as PDF.")
    export.add_argument("file_id")
    export.add_argument("output", type=Path)

    pdfs = commands.add_parser("fetch-pdfs", help="Download a list of PDF URLs.")
    pdfs.add_argument("urls", nargs="+")
    pdfs.add_argument("--output-dir", type=Path, default=Path("."))

    return parser


def _render(result: dict, output_format: str) -> str:
    if output_format == "csv":
        return object_to_csv([flatten_object(result)])
    return json.dumps(result, indent=2)


def _save_pdfs(urls, output_dir: Path) -> dict:
    settings = get_settings()
    output_dir.mkdir(parents=True, exist_ok=True)
    saved = []
    for i, response in enumerate(fetch_pdfs(unique(list(urls)), settings.FETCH_RATE_LIMIT), start=1):
        if response.status_code != 200:
            logging.warning(f"Skipping {response.url}: status {response.status_code}")
            continue
        path = output_dir / f"document_{i}.pdf"
        path.write_bytes(response.content)
        saved.append(str(path))
    return {"saved": saved}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging()
    settings = get_settings()

    try:
        if args.command == "fetch-pdfs":
            result = _save_pdfs(args.urls, args.output_dir)
        else:
            storage_client, root_id = initialize_storage_client(settings)
            if storage_client is None:
                logging.critical(
                    f"Could not establish a connection to {settings.STORAGE_PROVIDER}."
                )
                return 1
            result = _run_command(args, storage_client, root_id)
    except PermanentError as e:
        logging.error(f"{args.command} failed: {e}")
        return 1
    except TransientError as e:
        logging.warning(f"{args.command} failed, it may succeed on retry: {e}")
        return 1

    print(_render(result, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
