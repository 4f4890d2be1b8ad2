from typing import List

from fastapi import (
    APIRouter,
    Body,
    Depends,
    Query,
    Request,
    status,
)
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from contracts_api.dependencies import get_gateway
from contracts_api.errors import NO_CACHE_HEADERS, MissingFieldError, error_response
from contracts_api.schemas import (
    ContractFile,
    DeleteContractRequest,
    DeleteContractResponse,
    ErrorResponse,
)
from contracts_api.services import ContractGateway, DeleteOutcome

router = APIRouter(prefix="/api/contracts")

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Missing or invalid request fields."},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Blob store or database failure."},
}


def _json(content, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=NO_CACHE_HEADERS)


@router.get(
    "",
    response_model=List[ContractFile],
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: ERROR_RESPONSES[status.HTTP_500_INTERNAL_SERVER_ERROR]},
)
async def list_contracts(gateway: ContractGateway = Depends(get_gateway)) -> JSONResponse:
    """List every contract, newest upload first."""
    try:
        contracts = await run_in_threadpool(gateway.list_contracts)
    except Exception as e:
        return error_response("Failed to fetch contracts", str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _json([contract.model_dump(mode="json") for contract in contracts])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ContractFile,
    responses=ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/zip": {"schema": {"type": "string", "format": "binary"}}},
        }
    },
)
async def upload_contract(
    request: Request,
    filename: str = Query(..., min_length=1, description="Name to store the archive under."),
    gateway: ContractGateway = Depends(get_gateway),
) -> JSONResponse:
    """
    Upload a contract archive.

    The raw request body is the file; its size and URL come from the blob store.
    """
    body = await request.body()
    if not filename or not body:
        raise MissingFieldError("Missing filename or request body.")

    result = await run_in_threadpool(
        gateway.create_contract,
        filename,
        body,
        request.headers.get("content-type"),
    )
    if not result.ok:
        return error_response(
            "Failed to upload contract",
            str(result.error),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return _json(result.contract.model_dump(mode="json"), status.HTTP_201_CREATED)


@router.delete(
    "",
    response_model=DeleteContractResponse,
    responses={
        **ERROR_RESPONSES,
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "No contract has the given id."},
    },
)
async def delete_contract(
    payload: DeleteContractRequest = Body(...),
    gateway: ContractGateway = Depends(get_gateway),
) -> JSONResponse:
    """Delete a contract's blob, then its record."""
    result = await run_in_threadpool(gateway.delete_contract, payload.id, payload.url)
    if result.outcome == DeleteOutcome.NOT_FOUND:
        return error_response("Contract not found", str(result.error), status.HTTP_404_NOT_FOUND)
    if not result.ok:
        return error_response(
            "Failed to delete contract",
            str(result.error),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return _json(DeleteContractResponse().model_dump())
