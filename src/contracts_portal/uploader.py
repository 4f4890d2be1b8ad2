"""
Upload widget state machine.

    IDLE --select--> SELECTED --upload--> UPLOADING --ok--> IDLE
                                                    --error--> SELECTED (last_error set)

Invalid selections are rejected before anything reaches the network and
leave the widget IDLE.
"""

import logging
import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from contracts_api.schemas import ContractFile
from contracts_portal.client import ContractsClientError

logger = logging.getLogger(__name__)

ZIP_EXTENSION = ".zip"
ZIP_CONTENT_TYPE = "application/zip"
INVALID_FILE_MESSAGE = "Invalid file format. Please upload .zip files only."


class UploadState(str, Enum):
    IDLE = "idle"
    SELECTED = "selected"
    UPLOADING = "uploading"


class ClientValidationError(Exception):
    """The chosen file is not something the portal accepts."""


class UploadInProgressError(Exception):
    """An upload was started while another one from the same widget is running."""


@dataclass(frozen=True)
class SelectedFile:
    name: str
    data: bytes
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SelectedFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, data=path.read_bytes(), content_type=content_type)


def is_zip_file(name: str, content_type: Optional[str]) -> bool:
    """Accept a .zip extension or an application/zip declared type."""
    return name.lower().endswith(ZIP_EXTENSION) or content_type == ZIP_CONTENT_TYPE


class UploadWidget:
    """Selection and upload state for one upload form."""

    def __init__(self):
        self.state = UploadState.IDLE
        self.selected: Optional[SelectedFile] = None
        self.last_error: Optional[str] = None

    @property
    def is_uploading(self) -> bool:
        return self.state == UploadState.UPLOADING

    @property
    def can_upload(self) -> bool:
        return self.state == UploadState.SELECTED

    def select(self, candidate: Optional[SelectedFile]) -> None:
        """
        Handle a dropped or picked file.

        Raises `ClientValidationError` and clears the selection for anything
        that is not a zip archive.
        """
        if self.is_uploading:
            raise UploadInProgressError("Wait for the current upload to finish.")
        if candidate is None:
            return
        self.last_error = None
        if not is_zip_file(candidate.name, candidate.content_type):
            self.selected = None
            self.state = UploadState.IDLE
            raise ClientValidationError(INVALID_FILE_MESSAGE)
        self.selected = candidate
        self.state = UploadState.SELECTED

    def upload(self, send: Callable[[SelectedFile], ContractFile]) -> ContractFile:
        """
        Run `send` on the selected file.

        On success the widget returns to IDLE; on `ContractsClientError` it
        keeps the file selected, records the message and re-raises.
        """
        if self.is_uploading:
            raise UploadInProgressError("Wait for the current upload to finish.")
        if self.selected is None:
            raise ClientValidationError("Select a .zip file first.")

        self.state = UploadState.UPLOADING
        self.last_error = None
        try:
            contract = send(self.selected)
        except ContractsClientError as e:
            self.last_error = e.message
            raise
        finally:
            self.state = UploadState.SELECTED

        logger.info(f"Uploaded {self.selected.name} as {contract.id}")
        self.selected = None
        self.state = UploadState.IDLE
        return contract
