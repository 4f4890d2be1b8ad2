"""
Contracts API services.

The gateway coordinating the blob store and the metadata store.
"""

from .contract_gateway import (
    ContractGateway,
    CreateOutcome,
    CreateResult,
    DeleteOutcome,
    DeleteResult,
    sanitize_filename,
)

__all__ = [
    "ContractGateway",
    "CreateOutcome",
    "CreateResult",
    "DeleteOutcome",
    "DeleteResult",
    "sanitize_filename",
]
