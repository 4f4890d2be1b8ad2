import pytest

from contracts_portal.client import ContractsClientError
from contracts_portal.uploader import (
    INVALID_FILE_MESSAGE,
    ClientValidationError,
    SelectedFile,
    UploadInProgressError,
    UploadState,
    UploadWidget,
    is_zip_file,
)
from tests.unit_tests.portal.helpers import make_contract

ZIP_FILE = SelectedFile(name="contract.zip", data=b"PK\x03\x04", content_type="application/zip")


@pytest.mark.parametrize(
    "name, content_type, expected",
    [
        ("contract.zip", None, True),
        ("CONTRACT.ZIP", None, True),
        ("archive", "application/zip", True),
        ("contract.pdf", "application/pdf", False),
        ("contract.zip.pdf", None, False),
        ("notes.txt", "text/plain", False),
    ],
)
def test_is_zip_file(name, content_type, expected):
    assert is_zip_file(name, content_type) is expected


def test_select_zip():
    widget = UploadWidget()

    widget.select(ZIP_FILE)

    assert widget.state == UploadState.SELECTED
    assert widget.selected == ZIP_FILE
    assert widget.can_upload


def test_select_invalid_file_clears_selection():
    widget = UploadWidget()
    widget.select(ZIP_FILE)

    with pytest.raises(ClientValidationError, match=INVALID_FILE_MESSAGE):
        widget.select(SelectedFile(name="contract.pdf", data=b"%PDF"))

    assert widget.state == UploadState.IDLE
    assert widget.selected is None


def test_select_nothing_keeps_state():
    widget = UploadWidget()
    widget.select(ZIP_FILE)

    widget.select(None)

    assert widget.selected == ZIP_FILE


def test_upload_success_returns_to_idle():
    widget = UploadWidget()
    widget.select(ZIP_FILE)
    contract = make_contract("contract.zip")
    seen_states = []

    def send(selected):
        seen_states.append(widget.state)
        return contract

    assert widget.upload(send) == contract
    assert seen_states == [UploadState.UPLOADING]
    assert widget.state == UploadState.IDLE
    assert widget.selected is None


def test_upload_failure_keeps_selection():
    widget = UploadWidget()
    widget.select(ZIP_FILE)

    def send(selected):
        raise ContractsClientError("Failed to upload contract", status_code=500)

    with pytest.raises(ContractsClientError):
        widget.upload(send)

    assert widget.state == UploadState.SELECTED
    assert widget.selected == ZIP_FILE
    assert widget.last_error == "Failed to upload contract"


def test_upload_without_selection():
    with pytest.raises(ClientValidationError):
        UploadWidget().upload(lambda selected: None)


def test_no_second_upload_while_uploading():
    widget = UploadWidget()
    widget.select(ZIP_FILE)

    def send(selected):
        with pytest.raises(UploadInProgressError):
            widget.upload(send)
        with pytest.raises(UploadInProgressError):
            widget.select(ZIP_FILE)
        return make_contract("contract.zip")

    widget.upload(send)


def test_selected_file_from_path(tmp_path):
    path = tmp_path / "lease.zip"
    path.write_bytes(b"PK\x03\x04data")

    selected = SelectedFile.from_path(path)

    assert selected.name == "lease.zip"
    assert selected.size == 8
    assert selected.content_type in ("application/zip", "application/x-zip-compressed")
