import pytest
from click.testing import CliRunner

from contracts_portal.cli import cli
from contracts_portal.client import ContractsClientError
from tests.unit_tests.portal.helpers import make_contract
from tests.unit_tests.portal.test_app import FakeClient

OLD = make_contract("old-lease.zip", minutes=0, size=2048)
NEW = make_contract("new-nda.zip", minutes=5, size=10)


@pytest.fixture
def fake_client(monkeypatch):
    client = FakeClient([NEW, OLD])
    monkeypatch.setattr("contracts_portal.cli.ContractsClient", lambda base_url, timeout: client)
    return client


def invoke(*args, **kwargs):
    return CliRunner().invoke(cli, ["--api-url", "http://api.test", *args], **kwargs)


def test_list(fake_client):
    result = invoke("list")

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith(f"{NEW.id}  new-nda.zip  10.00 Bytes")
    assert lines[1].startswith(f"{OLD.id}  old-lease.zip  2.00 KB")


def test_list_with_search_and_sort(fake_client):
    result = invoke("list", "--search", "LEASE", "--sort", "name-asc")

    assert result.exit_code == 0, result.output
    assert "old-lease.zip" in result.output
    assert "new-nda.zip" not in result.output


def test_list_without_matches(fake_client):
    result = invoke("list", "--search", "invoice")
    assert "No contracts found." in result.output


def test_list_when_api_fails(fake_client):
    fake_client.fail_with = ContractsClientError("Failed to fetch contracts", 500)

    result = invoke("list")

    assert result.exit_code == 1
    assert "Failed to fetch contracts" in result.output


def test_upload(fake_client, tmp_path):
    path = tmp_path / "contract.zip"
    path.write_bytes(b"PK\x03\x04")

    result = invoke("upload", str(path))

    assert result.exit_code == 0, result.output
    assert "Selected file: contract.zip (4.00 Bytes)" in result.output
    assert "File uploaded successfully!" in result.output


def test_upload_rejects_non_zip(fake_client, tmp_path):
    path = tmp_path / "contract.pdf"
    path.write_bytes(b"%PDF")

    result = invoke("upload", str(path))

    assert result.exit_code == 1
    assert "Invalid file format. Please upload .zip files only." in result.output
    assert "Uploading..." not in result.output


def test_delete_with_confirmation(fake_client):
    result = invoke("delete", OLD.id, input="y\n")

    assert result.exit_code == 0, result.output
    assert 'Are you sure you want to delete "old-lease.zip"?' in result.output
    assert "File deleted successfully." in result.output
    assert fake_client.deleted == [(OLD.id, OLD.url)]


def test_delete_cancelled(fake_client):
    result = invoke("delete", OLD.id, input="n\n")

    assert result.exit_code == 0, result.output
    assert "Cancelled." in result.output
    assert fake_client.deleted == []


def test_delete_unknown_id(fake_client):
    result = invoke("delete", "missing", "--yes")

    assert result.exit_code == 1
    assert "No contract with id missing" in result.output


def test_delete_failure(fake_client):
    portal_client = fake_client

    def fail(contract_id, url):
        raise ContractsClientError("Failed to delete contract", 500)

    portal_client.delete_contract = fail

    result = invoke("delete", OLD.id, "--yes")

    assert result.exit_code == 1
    assert "Failed to delete contract" in result.output


def test_download(fake_client, tmp_path):
    result = invoke("download", NEW.id, str(tmp_path))

    assert result.exit_code == 0, result.output
    assert 'Download of "new-nda.zip" started.' in result.output
    assert fake_client.downloaded == [NEW.id]
