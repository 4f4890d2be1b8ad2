"""
Contract gateway: coordinates the blob store and the metadata store.

The two stores are not transactional. Creates write the blob first and
compensate with a blob delete if the insert fails; deletes remove the blob
first and never roll back. Each operation returns a result whose outcome says
which of those states the stores were left in.
"""

import logging
import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from contracts_api.adapters.storage import BlobStore, Body
from contracts_api.db_layer import ContractStore
from contracts_api.errors import ContractNotFoundError, OrphanedBlobError
from contracts_api.schemas import ContractFile

logger = logging.getLogger(__name__)

FALLBACK_FILENAME = "contract.zip"


class CreateOutcome(str, Enum):
    CREATED = "created"
    FAILED = "failed"
    FAILED_ORPHANED_BLOB = "failed_orphaned_blob"  # insert failed and the blob could not be removed


class DeleteOutcome(str, Enum):
    DELETED = "deleted"
    FAILED = "failed"
    FAILED_DANGLING_RECORD = "failed_dangling_record"  # blob removed, row still present
    NOT_FOUND = "not_found"


@dataclass
class CreateResult:
    outcome: CreateOutcome
    contract: Optional[ContractFile] = None
    error: Optional[Exception] = None
    orphaned_url: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == CreateOutcome.CREATED


@dataclass
class DeleteResult:
    outcome: DeleteOutcome
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.outcome == DeleteOutcome.DELETED


def sanitize_filename(raw: Optional[str]) -> str:
    """Keep only the last path component of a client-supplied filename."""
    name = (raw or "").replace("\\", "/")
    name = posixpath.basename(name).strip()
    if name in ("", ".", ".."):
        return FALLBACK_FILENAME
    return name


class ContractGateway:
    """List, create and delete contracts across the blob and metadata stores."""

    def __init__(self, store: ContractStore, blobs: BlobStore):
        self.store = store
        self.blobs = blobs

    def list_contracts(self) -> List[ContractFile]:
        return self.store.list_contracts()

    def create_contract(self, filename: str, body: Body, content_type: Optional[str] = None) -> CreateResult:
        name = sanitize_filename(filename)

        try:
            blob = self.blobs.put(name, body, content_type)
        except OrphanedBlobError as e:
            logger.warning(f"Orphaned blob left at {e.url}: {e}")
            return CreateResult(outcome=CreateOutcome.FAILED_ORPHANED_BLOB, error=e, orphaned_url=e.url)
        except Exception as e:
            logger.error(f"Blob write failed for {name}: {e}")
            return CreateResult(outcome=CreateOutcome.FAILED, error=e)

        try:
            contract = self.store.create_contract(name=name, size=blob.size, url=blob.url)
        except Exception as insert_error:
            logger.error(f"Insert failed for {blob.url}, removing blob: {insert_error}")
            try:
                self.blobs.delete(blob.url)
            except Exception as cleanup_error:
                logger.warning(f"Orphaned blob left at {blob.url}: {cleanup_error}")
                return CreateResult(
                    outcome=CreateOutcome.FAILED_ORPHANED_BLOB,
                    error=insert_error,
                    orphaned_url=blob.url,
                )
            return CreateResult(outcome=CreateOutcome.FAILED, error=insert_error)

        logger.info(f"Contract {contract.id} created: {contract.name} ({contract.size} bytes)")
        return CreateResult(outcome=CreateOutcome.CREATED, contract=contract)

    def delete_contract(self, contract_id: str, url: str) -> DeleteResult:
        try:
            self.blobs.delete(url)
        except Exception as e:
            logger.error(f"Blob delete failed for contract {contract_id}: {e}")
            return DeleteResult(outcome=DeleteOutcome.FAILED, error=e)

        try:
            self.store.delete_contract(contract_id)
        except ContractNotFoundError as e:
            logger.warning(f"Blob {url} deleted but contract {contract_id} had no record")
            return DeleteResult(outcome=DeleteOutcome.NOT_FOUND, error=e)
        except Exception as e:
            logger.warning(f"Blob {url} deleted but record {contract_id} remains: {e}")
            return DeleteResult(outcome=DeleteOutcome.FAILED_DANGLING_RECORD, error=e)

        logger.info(f"Contract {contract_id} deleted")
        return DeleteResult(outcome=DeleteOutcome.DELETED)
