"""
Contract metadata stores.

`ContractStore` is the seam the gateway depends on; `SqliteContractStore`
persists rows through `database.local` and `InMemoryContractStore` keeps them
in a list for local experiments and tests.
"""

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Dict, List

from contracts_api.database import local
from contracts_api.errors import ContractNotFoundError, UpstreamDatabaseError
from contracts_api.schemas import ContractFile

logger = logging.getLogger(__name__)


class ContractStore:
    """Base class for contract metadata stores (to be extended by specific implementations)"""

    def list_contracts(self) -> List[ContractFile]:
        """All records, newest upload first."""
        raise NotImplementedError

    def create_contract(self, name: str, size: int, url: str) -> ContractFile:
        """Insert a record; the store assigns `id` and `uploaded_at`."""
        raise NotImplementedError

    def delete_contract(self, contract_id: str) -> None:
        """Remove a record. Raises `ContractNotFoundError` when the id is unknown."""
        raise NotImplementedError

    def ping(self) -> None:
        """Raise if the store cannot be reached."""
        self.list_contracts()


class SqliteContractStore(ContractStore):
    """Contract store backed by a SQLite file."""

    def __init__(self, db_path: str = local.DEFAULT_DB_PATH):
        self.db_path = db_path
        try:
            local.init_db(db_path)
        except sqlite3.Error as e:
            raise UpstreamDatabaseError(f"Could not initialize database {db_path}: {e}") from e
        logger.info(f"SqliteContractStore initialized at: {db_path}")

    def list_contracts(self) -> List[ContractFile]:
        try:
            rows = local.list_contracts(self.db_path)
        except sqlite3.Error as e:
            logger.error(f"Error listing contracts: {e}")
            raise UpstreamDatabaseError(str(e)) from e
        return [ContractFile(**row) for row in rows]

    def create_contract(self, name: str, size: int, url: str) -> ContractFile:
        try:
            row = local.add_contract(name=name, size=size, url=url, db_path=self.db_path)
        except sqlite3.Error as e:
            logger.error(f"Error creating contract record for {url}: {e}")
            raise UpstreamDatabaseError(str(e)) from e
        logger.info(f"Created contract record: {row['id']}")
        return ContractFile(**row)

    def delete_contract(self, contract_id: str) -> None:
        try:
            deleted = local.delete_contract(contract_id, self.db_path)
        except sqlite3.Error as e:
            logger.error(f"Error deleting contract {contract_id}: {e}")
            raise UpstreamDatabaseError(str(e)) from e
        if not deleted:
            raise ContractNotFoundError(contract_id)
        logger.info(f"Deleted contract record: {contract_id}")


class InMemoryContractStore(ContractStore):
    """Contract store holding records in process memory."""

    def __init__(self):
        self._records: Dict[str, ContractFile] = {}

    def list_contracts(self) -> List[ContractFile]:
        # dicts keep insertion order, so reversing breaks timestamp ties newest first
        records = list(reversed(list(self._records.values())))
        return sorted(records, key=lambda record: record.uploaded_at, reverse=True)

    def create_contract(self, name: str, size: int, url: str) -> ContractFile:
        if any(record.url == url for record in self._records.values()):
            raise UpstreamDatabaseError(f"UNIQUE constraint failed: contracts.url ({url})")
        record = ContractFile(
            id=uuid.uuid4().hex,
            name=name,
            size=size,
            url=url,
            uploaded_at=datetime.now(timezone.utc),
        )
        self._records[record.id] = record
        return record

    def delete_contract(self, contract_id: str) -> None:
        if self._records.pop(contract_id, None) is None:
            raise ContractNotFoundError(contract_id)
