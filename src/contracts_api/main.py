from textwrap import dedent
import logging
from typing import Optional

import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from contracts_api.adapters.storage import BlobStore, LocalBlobStore, get_blob_store
from contracts_api.config.settings import Settings, configure_logging, get_settings
from contracts_api.db_layer import ContractStore, get_contract_store
from contracts_api.errors import (
    MissingFieldError,
    handle_broad_exceptions,
    handle_missing_field_errors,
    handle_pydantic_validation_errors,
    handle_request_validation_errors,
)
from contracts_api.routers.blobs import router as blobs_router
from contracts_api.routers.contracts import router as contracts_router
from contracts_api.routers.health import router as health_router
from contracts_api.services import ContractGateway

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ContractStore] = None,
    blobs: Optional[BlobStore] = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    `store` and `blobs` default to the ones described by `settings`; pass
    them explicitly to run against fakes.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Contracts API",
        summary="Store contract archives",
        version="v1",
        description=dedent(
            """\
        Upload, list and delete ZIP contract archives.

        | Route | Notes |
        | --- | --- |
        | `GET /api/contracts` | newest upload first |
        | `POST /api/contracts?filename=...` | raw file bytes as the body |
        | `DELETE /api/contracts` | JSON `{id, url}` |
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info(f"Starting {settings.app_name} in {settings.deployment_mode} mode")
    if store is None:
        store = get_contract_store(settings)
    if blobs is None:
        blobs = get_blob_store(settings)

    app.state.settings = settings
    app.state.gateway = ContractGateway(store=store, blobs=blobs)

    app.include_router(contracts_router, tags=["contracts"])
    app.include_router(health_router, tags=["health"])
    if isinstance(blobs, LocalBlobStore):
        app.include_router(blobs_router, tags=["blobs"])

    app.add_exception_handler(
        exc_class_or_status_code=RequestValidationError,
        handler=handle_request_validation_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=MissingFieldError,
        handler=handle_missing_field_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
