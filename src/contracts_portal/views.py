"""Derived file list: search filter and sort order over the canonical collection."""

from enum import Enum
from typing import Iterable, List

from contracts_api.schemas import ContractFile


class SortMode(str, Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"


DEFAULT_SORT_MODE = SortMode.DATE_DESC


def filter_contracts(contracts: Iterable[ContractFile], term: str) -> List[ContractFile]:
    """Contracts whose name contains `term`, ignoring case."""
    needle = (term or "").lower()
    return [contract for contract in contracts if needle in contract.name.lower()]


def sort_contracts(contracts: Iterable[ContractFile], mode: SortMode = DEFAULT_SORT_MODE) -> List[ContractFile]:
    """Stable sort by the given mode; names compare case-insensitively."""
    mode = SortMode(mode)
    if mode == SortMode.NAME_ASC:
        return sorted(contracts, key=lambda c: c.name.casefold())
    if mode == SortMode.NAME_DESC:
        return sorted(contracts, key=lambda c: c.name.casefold(), reverse=True)
    if mode == SortMode.DATE_ASC:
        return sorted(contracts, key=lambda c: c.uploaded_at)
    return sorted(contracts, key=lambda c: c.uploaded_at, reverse=True)


def visible_contracts(
    contracts: Iterable[ContractFile],
    term: str = "",
    mode: SortMode = DEFAULT_SORT_MODE,
) -> List[ContractFile]:
    return sort_contracts(filter_contracts(contracts, term), mode)
