# tests/test_main.py
import json
from unittest.mock import patch, MagicMock

from drivenav.main import build_parser, initialize_storage_client, main
from drivenav.config import Settings
from drivenav.memory import InMemoryStorageClient
import pytest


def test_initialize_storage_client_memory():
    settings = MagicMock(spec=Settings)
    settings.STORAGE_PROVIDER = "memory"

    storage_client, root_id = initialize_storage_client(settings)

    assert isinstance(storage_client, InMemoryStorageClient)
    assert root_id == "root"


@patch("drivenav.main._init_gdrive_client")
def test_initialize_storage_client_gdrive(mock_init_gdrive):
    settings = MagicMock(spec=Settings)
    settings.STORAGE_PROVIDER = "gdrive"
    settings.GDRIVE_ROOT_FOLDER_ID = "drive_root"
    mock_gdrive_client = MagicMock()
    mock_init_gdrive.return_value = mock_gdrive_client

    result = initialize_storage_client(settings)

    assert result == (mock_gdrive_client, "drive_root")
    mock_init_gdrive.assert_called_once_with(settings)


@patch("drivenav.main.GoogleDriveClient")
def test_init_gdrive_client_failure_returns_none(MockClient):
    from drivenav.main import _init_gdrive_client

    MockClient.side_effect = ValueError("bad token")
    settings = MagicMock(spec=Settings)
    settings.GDRIVE_CREDENTIALS_JSON = "{}"
    settings.GDRIVE_TOKEN_JSON = "{}"
    settings.GDRIVE_PAGE_SIZE = 10

    assert _init_gdrive_client(settings) is None


def test_initialize_storage_client_unknown_provider():
    settings = MagicMock(spec=Settings)
    settings.STORAGE_PROVIDER = "ftp"

    assert initialize_storage_client(settings) == (None, "")


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


@patch("drivenav.main.setup_logging")
def test_main_find_or_create_prints_node(mock_setup_logging, capsys):
    exit_code = main(["find-or-create", "root", "Invoices", "--move-to"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["name"] == "Invoices"
    assert output["kind"] == "folder"
    assert "content" not in output


@patch("drivenav.main.setup_logging")
def test_main_not_found_exits_with_error(mock_setup_logging, capsys):
    exit_code = main(["move", "missing", "root"])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


@patch("drivenav.main.setup_logging")
def test_main_find_missing_file(mock_setup_logging):
    assert main(["find", "report.pdf", "--partial"]) == 1


@patch("drivenav.main.setup_logging")
def test_main_export_pdf_requires_gdrive(mock_setup_logging, tmp_path):
    assert main(["export-pdf", "doc_id", str(tmp_path / "out.pdf")]) == 1


@patch("drivenav.main.setup_logging")
@patch("drivenav.main.initialize_storage_client", return_value=(None, ""))
def test_main_without_client_exits_with_error(mock_init, mock_setup_logging):
    assert main(["copy", "a", "b"]) == 1


@patch("drivenav.main.setup_logging")
@patch("drivenav.main.fetch_pdfs")
def test_main_fetch_pdfs_saves_successful_responses(mock_fetch_pdfs, mock_setup_logging, tmp_path, capsys):
    ok = MagicMock(status_code=200, content=b"%PDF-1.7")
    failed = MagicMock(status_code=500, url="https://a/2.pdf")
    mock_fetch_pdfs.return_value = [ok, failed]

    exit_code = main(["fetch-pdfs", "https://a/1.pdf", "https://a/2.pdf", "--output-dir", str(tmp_path)])

    assert exit_code == 0
    assert (tmp_path / "document_1.pdf").read_bytes() == b"%PDF-1.7"
    assert not (tmp_path / "document_2.pdf").exists()
    assert json.loads(capsys.readouterr().out) == {"saved": [str(tmp_path / "document_1.pdf")]}
    mock_fetch_pdfs.assert_called_once_with(["https://a/1.pdf", "https://a/2.pdf"], ())


@patch("drivenav.main.setup_logging")
def test_main_csv_format_flattens_result(mock_setup_logging, capsys):
    exit_code = main(["--format", "csv", "find-or-create", "root", "Invoices"])

    assert exit_code == 0
    assert capsys.readouterr().out == (
        'id,kind,mime_type,name\r\n'
        '"folder-1","folder","","Invoices"\n'
    )


@patch("drivenav.main.setup_logging")
@patch("drivenav.main.fetch_pdfs")
def test_main_fetch_pdfs_drops_duplicate_urls(mock_fetch_pdfs, mock_setup_logging, tmp_path):
    mock_fetch_pdfs.return_value = []

    main(["fetch-pdfs", "https://a/1.pdf", "https://a/2.pdf", "https://a/1.pdf", "--output-dir", str(tmp_path)])

    mock_fetch_pdfs.assert_called_once_with(["https://a/1.pdf", "https://a/2.pdf"], ())


def test_help_mentions_memory_provider_is_not_persistent():
    assert "nothing is kept" in build_parser().epilog
