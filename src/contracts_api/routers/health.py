from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns the state of the metadata database and the blob store along with
    the deployment mode.
    """
    settings = request.app.state.settings
    gateway = request.app.state.gateway

    health_status = {
        "status": "ok",
        "deployment_mode": settings.deployment_mode,
        "components": {
            "api": "ready",
            "database": "ready",
            "storage": "ready",
        },
    }

    try:
        await run_in_threadpool(gateway.store.ping)
    except Exception as e:
        health_status["components"]["database"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    try:
        await run_in_threadpool(gateway.blobs.ping)
    except Exception as e:
        health_status["components"]["storage"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    return health_status
