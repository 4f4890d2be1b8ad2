"""
HTTP client for the Contracts API.

Wraps the three `/api/contracts` calls plus blob downloads. Every failure,
whether the API answered with an error or the request never completed, is
raised as `ContractsClientError` carrying a message fit for the user.
"""

import logging
import mimetypes
from pathlib import Path
from typing import List, Optional, Union

import pydantic
import requests

from contracts_api.schemas import ContractFile

logger = logging.getLogger(__name__)

CONTRACTS_PATH = "/api/contracts"
DEFAULT_CONTENT_TYPE = "application/zip"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
DOWNLOAD_CHUNK_SIZE = 64 * 1024


class ContractsClientError(Exception):
    """A failed API call, with the message to show the user."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def _error_from_response(response: requests.Response) -> ContractsClientError:
    try:
        body = response.json()
    except ValueError:
        body = None

    message = None
    details = None
    if isinstance(body, dict):
        message = body.get("error") or body.get("details")
        details = body.get("details")
    return ContractsClientError(message or UNKNOWN_ERROR_MESSAGE, response.status_code, details)


class ContractsClient:
    """Synchronous client for the Contracts API."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 60.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def contracts_url(self) -> str:
        return f"{self.base_url}{CONTRACTS_PATH}"

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        logger.info(f"Making {method} request to {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ContractsClientError(UNKNOWN_ERROR_MESSAGE, details=str(e)) from e

        if not response.ok:
            error = _error_from_response(response)
            logger.error(f"{method} {url} returned {response.status_code}: {error.message}")
            raise error
        return response

    @staticmethod
    def _parse_contract(data) -> ContractFile:
        try:
            return ContractFile.model_validate(data)
        except pydantic.ValidationError as e:
            raise ContractsClientError(UNKNOWN_ERROR_MESSAGE, details=str(e)) from e

    def list_contracts(self) -> List[ContractFile]:
        """Fetch every contract, newest upload first."""
        response = self._send("GET", self.contracts_url)
        try:
            items = response.json()
        except ValueError as e:
            raise ContractsClientError(UNKNOWN_ERROR_MESSAGE, response.status_code, str(e)) from e
        if not isinstance(items, list):
            raise ContractsClientError(UNKNOWN_ERROR_MESSAGE, response.status_code, "Expected a JSON array")
        return [self._parse_contract(item) for item in items]

    def upload_contract(self, name: str, data: bytes, content_type: Optional[str] = None) -> ContractFile:
        """Upload an archive's bytes under `name` and return the stored record."""
        response = self._send(
            "POST",
            self.contracts_url,
            params={"filename": name},
            data=data,
            headers={"Content-Type": content_type or DEFAULT_CONTENT_TYPE},
        )
        try:
            return self._parse_contract(response.json())
        except ValueError as e:
            raise ContractsClientError(UNKNOWN_ERROR_MESSAGE, response.status_code, str(e)) from e

    def upload_path(self, path: Union[str, Path]) -> ContractFile:
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return self.upload_contract(path.name, path.read_bytes(), content_type)

    def delete_contract(self, contract_id: str, url: str) -> None:
        """Delete a contract's blob and record."""
        self._send("DELETE", self.contracts_url, json={"id": contract_id, "url": url})

    def download_contract(self, contract: ContractFile, destination: Union[str, Path]) -> Path:
        """
        Stream a contract's blob to disk.

        If `destination` is a directory the file keeps its record name.
        """
        destination = Path(destination)
        if destination.is_dir():
            destination = destination / contract.name

        response = self._send("GET", contract.url, stream=True)
        try:
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
        except requests.exceptions.RequestException as e:
            raise ContractsClientError(UNKNOWN_ERROR_MESSAGE, details=str(e)) from e
        finally:
            response.close()
        logger.info(f"Downloaded {contract.url} to {destination}")
        return destination
