import logging
import uuid

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..auth import get_caller_context
from ..config import (
    R2_ACCESS_KEY_ID,
    R2_ACCOUNT_ID,
    R2_BUCKET_NAME,
    R2_SECRET_ACCESS_KEY,
    UPLOAD_URL_EXPIRATION,
)
from ..shared.context import CallerContext
from ..shared.guards import require_identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["Files"])


class UploadUrlResponse(BaseModel):
    uploadUrl: str
    storageKey: str
    expiresIn: int


def get_r2_client():
    """Create and return an R2 client."""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=R2_ACCESS_KEY_ID,
        aws_secret_access_key=R2_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
    )


def generate_upload_url(owner_id: str, expiration: int = UPLOAD_URL_EXPIRATION) -> tuple[str, str]:
    """
    Generate a presigned PUT URL for a fresh object key.

    Returns (url, key). The client PUTs the bytes straight to storage.
    """
    key = f"uploads/{owner_id}/{uuid.uuid4()}"
    r2 = get_r2_client()
    url = r2.generate_presigned_url(
        "put_object",
        Params={"Bucket": R2_BUCKET_NAME, "Key": key},
        ExpiresIn=expiration,
    )
    logger.info(f"✅ Generated upload URL for key: {key}")
    return url, key


@router.post("/upload-url", response_model=UploadUrlResponse)
async def create_upload_url(ctx: CallerContext = Depends(get_caller_context)):
    """Generate a short-lived upload URL for the signed-in caller"""
    user_id = require_identity(ctx)

    try:
        url, key = generate_upload_url(user_id)
    except (BotoCoreError, ClientError) as e:
        logger.error(f"❌ Failed to generate upload URL for {user_id}: {e}")
        raise HTTPException(status_code=502, detail="File storage unavailable") from e

    return UploadUrlResponse(uploadUrl=url, storageKey=key, expiresIn=UPLOAD_URL_EXPIRATION)
