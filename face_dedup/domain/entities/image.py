"""Image domain entities."""
from pydantic import BaseModel, ConfigDict, Field


class ImageUploadEvent(BaseModel):
    """Inbound event delivered for each uploaded image."""
    s3_bucket: str = Field(..., alias="s3Bucket", description="S3 bucket holding the image")
    s3_key: str = Field(..., alias="s3Key", description="Raw, possibly URL-encoded, S3 object key")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ImageReference(BaseModel):
    """Decoded location of an image in S3."""
    container: str = Field(..., min_length=1, description="S3 bucket name")
    key: str = Field(..., min_length=1, description="Literal S3 object key")

    model_config = ConfigDict(frozen=True)

    @property
    def uri(self) -> str:
        return f"s3://{self.container}/{self.key}"
