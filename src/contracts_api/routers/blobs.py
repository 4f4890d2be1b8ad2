from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse

from contracts_api.adapters.storage import BLOB_ROUTE_PREFIX, LocalBlobStore

router = APIRouter(prefix=BLOB_ROUTE_PREFIX)


@router.get(
    "/{pathname:path}",
    responses={
        status.HTTP_404_NOT_FOUND: {
            "description": "No blob stored under the given `pathname`.",
        },
        status.HTTP_200_OK: {
            "description": "The archive content.",
            "content": {
                "application/zip": {
                    "schema": {"type": "string", "format": "binary"},
                },
            },
        },
    },
)
async def download_blob(request: Request, pathname: str) -> FileResponse:
    """Serve a blob written by the local filesystem store."""
    blobs: LocalBlobStore = request.app.state.gateway.blobs
    path = blobs.path_for(pathname)
    if path is None or not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return FileResponse(path, media_type="application/zip", filename=path.name)
