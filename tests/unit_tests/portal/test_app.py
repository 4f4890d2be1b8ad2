import pytest

from contracts_portal.app import DELETE_SUCCESS_MESSAGE, UPLOAD_SUCCESS_MESSAGE, ContractPortal
from contracts_portal.client import ContractsClientError
from contracts_portal.notifications import NotificationKind
from contracts_portal.uploader import INVALID_FILE_MESSAGE, SelectedFile, UploadState
from contracts_portal.views import SortMode
from tests.unit_tests.portal.helpers import FakeClock, make_contract

OLD = make_contract("old.zip", minutes=0)
NEW = make_contract("new.zip", minutes=5)
UPLOADED = make_contract("contract.zip", minutes=10)
ZIP_FILE = SelectedFile(name="contract.zip", data=b"PK\x03\x04", content_type="application/zip")


class FakeClient:
    def __init__(self, contracts=None):
        self.contracts = list(contracts or [])
        self.fail_with = None
        self.deleted = []
        self.downloaded = []

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    def list_contracts(self):
        self._maybe_fail()
        return list(self.contracts)

    def upload_contract(self, name, data, content_type=None):
        self._maybe_fail()
        return UPLOADED

    def delete_contract(self, contract_id, url):
        self._maybe_fail()
        self.deleted.append((contract_id, url))

    def download_contract(self, contract, destination):
        self._maybe_fail()
        self.downloaded.append(contract.id)
        return destination / contract.name


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_client():
    return FakeClient([NEW, OLD])


@pytest.fixture
def portal(fake_client, clock):
    portal = ContractPortal(fake_client, notification_ttl=5.0, clock=clock)
    portal.refresh()
    return portal


def messages(portal, kind=None):
    return [n.message for n in portal.active_notifications() if kind is None or n.kind == kind]


def test_refresh_loads_contracts(portal):
    assert portal.contracts == [NEW, OLD]
    assert not portal.is_loading
    assert portal.active_notifications() == []


def test_refresh_failure_keeps_collection(portal, fake_client):
    fake_client.fail_with = ContractsClientError("Failed to fetch contracts", 500)

    assert portal.refresh() is False
    assert portal.contracts == [NEW, OLD]
    assert messages(portal, NotificationKind.ERROR) == ["Failed to fetch contracts"]


def test_visible_contracts_use_search_and_sort(portal):
    portal.set_sort("name-asc")
    assert portal.visible_contracts == [NEW, OLD]

    portal.set_search("OLD")
    assert portal.visible_contracts == [OLD]
    assert portal.contracts == [NEW, OLD]


def test_default_sort_is_newest_first(portal):
    assert portal.sort_mode == SortMode.DATE_DESC
    assert portal.visible_contracts == [NEW, OLD]


def test_upload_prepends_contract(portal):
    assert portal.select_file(ZIP_FILE)

    assert portal.upload() == UPLOADED

    assert portal.contracts == [UPLOADED, NEW, OLD]
    assert messages(portal, NotificationKind.SUCCESS) == [UPLOAD_SUCCESS_MESSAGE]
    assert portal.uploader.state == UploadState.IDLE


def test_upload_failure(portal, fake_client):
    portal.select_file(ZIP_FILE)
    fake_client.fail_with = ContractsClientError("Failed to upload contract", 500)

    assert portal.upload() is None

    assert portal.contracts == [NEW, OLD]
    assert messages(portal, NotificationKind.ERROR) == ["Failed to upload contract"]
    assert portal.uploader.state == UploadState.SELECTED


def test_invalid_file_is_rejected_locally(portal):
    assert portal.select_file(SelectedFile(name="contract.pdf", data=b"%PDF")) is False

    assert messages(portal, NotificationKind.ERROR) == [INVALID_FILE_MESSAGE]
    assert portal.uploader.state == UploadState.IDLE


def test_select_missing_path(portal, tmp_path):
    assert portal.select_path(tmp_path / "missing.zip") is False
    assert messages(portal, NotificationKind.ERROR)[0].startswith("Could not read")


def test_upload_without_selection(portal):
    assert portal.upload() is None
    assert messages(portal, NotificationKind.ERROR) == ["Select a .zip file first."]


def test_confirm_delete_removes_only_that_contract(portal, fake_client):
    portal.request_delete(OLD)

    assert portal.confirm_delete()

    assert fake_client.deleted == [(OLD.id, OLD.url)]
    assert portal.contracts == [NEW]
    assert portal.pending_delete is None
    assert messages(portal, NotificationKind.SUCCESS) == [DELETE_SUCCESS_MESSAGE]


def test_request_delete_replaces_pending_candidate(portal, fake_client):
    portal.request_delete(OLD)
    portal.request_delete(NEW)

    portal.confirm_delete()

    assert fake_client.deleted == [(NEW.id, NEW.url)]
    assert portal.contracts == [OLD]


def test_cancel_delete(portal, fake_client):
    portal.request_delete(OLD)
    portal.cancel_delete()

    assert portal.confirm_delete() is False
    assert fake_client.deleted == []
    assert portal.contracts == [NEW, OLD]


def test_delete_failure_keeps_collection(portal, fake_client):
    fake_client.fail_with = ContractsClientError("Failed to delete contract", 500)
    portal.request_delete(OLD)

    assert portal.confirm_delete() is False

    assert portal.contracts == [NEW, OLD]
    assert portal.pending_delete is None
    assert messages(portal, NotificationKind.ERROR) == ["Failed to delete contract"]


def test_download(portal, fake_client, tmp_path):
    path = portal.download(NEW, tmp_path)

    assert path == tmp_path / "new.zip"
    assert fake_client.downloaded == [NEW.id]
    assert messages(portal)[0] == 'Download of "new.zip" started.'


def test_notifications_expire(portal, clock):
    portal.request_delete(OLD)
    portal.confirm_delete()

    clock.advance(5)

    assert portal.active_notifications() == []
