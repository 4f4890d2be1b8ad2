"""
Contracts API database layer.

Stores for contract metadata rows, selected from settings by
`get_contract_store`.
"""

from contracts_api.config.settings import Settings

from .contract_store import ContractStore, InMemoryContractStore, SqliteContractStore

MEMORY_DATABASE = ":memory:"


def get_contract_store(settings: Settings) -> ContractStore:
    """Build the metadata store named by `settings.database_path`."""
    if settings.database_path == MEMORY_DATABASE:
        return InMemoryContractStore()
    return SqliteContractStore(settings.database_path)


__all__ = [
    "ContractStore",
    "InMemoryContractStore",
    "SqliteContractStore",
    "get_contract_store",
]
