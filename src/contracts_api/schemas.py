####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime, timezone

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

EXAMPLE_CONTRACT = {
    "id": "4f1c2a9be0d34c7f8a51d2e6b7c90a13",
    "name": "contrato_cliente_alpha_2023.zip",
    "size": 1258291,
    "url": "https://contract-portal-files.s3.us-east-1.amazonaws.com/contrato_cliente_alpha_2023-3fa85f64.zip",
    "uploaded_at": "2024-01-01T12:00:00.000Z",
}


class ContractFile(BaseModel):
    """Metadata of an uploaded contract archive."""
    id: str = Field(description="Identifier assigned by the database.")
    name: str = Field(description="Sanitized original filename.")
    size: int = Field(ge=0, description="Size of the blob in bytes, as reported by the blob store.")
    url: str = Field(description="Location of the blob; used to download and to delete it.")
    uploaded_at: datetime = Field(description="When the record was created (UTC).")

    model_config = ConfigDict(
        json_schema_extra={"example": EXAMPLE_CONTRACT},
    )

    @field_validator("uploaded_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Timestamps without an offset are stored in UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class DeleteContractRequest(BaseModel):
    """Request body for `DELETE /api/contracts`."""
    id: str = Field(min_length=1, description="Id of the record to delete.")
    url: str = Field(min_length=1, description="Blob URL of the record to delete.")

    model_config = ConfigDict(
        json_schema_extra={"example": {"id": EXAMPLE_CONTRACT["id"], "url": EXAMPLE_CONTRACT["url"]}},
    )


class DeleteContractResponse(BaseModel):
    """Response body for a successful `DELETE /api/contracts`."""
    success: bool = True


class ErrorResponse(BaseModel):
    """Body returned by every failing request."""
    error: str = Field(description="Short, human-readable summary of the failure.")
    details: str = Field(description="Upstream or validation message explaining the failure.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Failed to upload contract",
                "details": "An error occurred (NoSuchBucket) when calling the PutObject operation",
            }
        }
    )
