"""
Root portal application.

Owns the canonical contract collection and dispatches user actions to the
API client. Failures never escape: each one becomes an error notification
and the collection is left as it was.
"""

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Union

from contracts_api.schemas import ContractFile
from contracts_portal.client import ContractsClient, ContractsClientError
from contracts_portal.notifications import DEFAULT_TTL_SECONDS, Notification, NotificationCenter
from contracts_portal.uploader import (
    ClientValidationError,
    SelectedFile,
    UploadInProgressError,
    UploadWidget,
)
from contracts_portal.views import DEFAULT_SORT_MODE, SortMode, visible_contracts

logger = logging.getLogger(__name__)

UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully!"
DELETE_SUCCESS_MESSAGE = "File deleted successfully."


class ContractPortal:
    """State and actions behind the portal's views."""

    def __init__(
        self,
        client: ContractsClient,
        notification_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.client = client
        self.contracts: List[ContractFile] = []
        self.search_term = ""
        self.sort_mode = DEFAULT_SORT_MODE
        self.pending_delete: Optional[ContractFile] = None
        self.is_loading = False
        self.uploader = UploadWidget()
        self.notifications = NotificationCenter(ttl=notification_ttl, clock=clock or time.monotonic)

    # --- derived view ---

    @property
    def visible_contracts(self) -> List[ContractFile]:
        return visible_contracts(self.contracts, self.search_term, self.sort_mode)

    def set_search(self, term: str) -> None:
        self.search_term = term or ""

    def set_sort(self, mode: Union[SortMode, str]) -> None:
        self.sort_mode = SortMode(mode)

    def find(self, contract_id: str) -> Optional[ContractFile]:
        return next((c for c in self.contracts if c.id == contract_id), None)

    def active_notifications(self) -> List[Notification]:
        return self.notifications.active()

    # --- actions ---

    def refresh(self) -> bool:
        """Replace the collection with the server's list."""
        self.is_loading = True
        try:
            self.contracts = self.client.list_contracts()
        except ContractsClientError as e:
            self.notifications.error(e.message)
            return False
        finally:
            self.is_loading = False
        return True

    def select_file(self, candidate: Optional[SelectedFile]) -> bool:
        """Entry point for both drag-and-drop and the file picker."""
        try:
            self.uploader.select(candidate)
        except (ClientValidationError, UploadInProgressError) as e:
            self.notifications.error(str(e))
            return False
        return self.uploader.selected is not None

    def select_path(self, path: Union[str, Path]) -> bool:
        try:
            candidate = SelectedFile.from_path(path)
        except OSError as e:
            self.notifications.error(f"Could not read {path}: {e.strerror or e}")
            return False
        return self.select_file(candidate)

    def upload(self) -> Optional[ContractFile]:
        """Upload the selected file and prepend the new record on success."""
        try:
            contract = self.uploader.upload(
                lambda f: self.client.upload_contract(f.name, f.data, f.content_type)
            )
        except (ContractsClientError, ClientValidationError, UploadInProgressError) as e:
            self.notifications.error(getattr(e, "message", None) or str(e))
            return None
        self.contracts = [contract] + self.contracts
        self.notifications.success(UPLOAD_SUCCESS_MESSAGE)
        return contract

    def request_delete(self, contract: ContractFile) -> None:
        """Mark `contract` as awaiting confirmation, replacing any earlier candidate."""
        self.pending_delete = contract

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        """Delete the pending candidate; on success drop exactly that record."""
        contract = self.pending_delete
        if contract is None:
            return False
        self.pending_delete = None
        try:
            self.client.delete_contract(contract.id, contract.url)
        except ContractsClientError as e:
            self.notifications.error(e.message)
            return False
        self.contracts = [c for c in self.contracts if c.id != contract.id]
        self.notifications.success(DELETE_SUCCESS_MESSAGE)
        return True

    def download(self, contract: ContractFile, destination: Union[str, Path]) -> Optional[Path]:
        self.notifications.success(f'Download of "{contract.name}" started.')
        try:
            path = self.client.download_contract(contract, destination)
        except (ContractsClientError, OSError) as e:
            self.notifications.error(getattr(e, "message", None) or str(e))
            return None
        self.notifications.success(f'Downloaded "{contract.name}" to {path}.')
        return path
