"""
Artwork image upload route.
Stores the original privately on Cloudinary and returns a watermarked delivery URL for display.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, File, status
import logging

from gallery_admin.schemas import UploadResponse
from gallery_admin.services.cloudinary_service import upload_image, generate_watermarked_url
from gallery_admin.utils.auth import CurrentUser, get_current_user
from gallery_admin.utils.image_converter import convert_to_webp
from gallery_admin.utils.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])


@router.post("/upload", response_model=UploadResponse)
@limiter.limit(RATE_LIMITS["upload"])
async def upload_artwork_image(
    request: Request,
    file: UploadFile = File(...),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Upload an artwork image.

    The file is converted to WebP when that makes it smaller, uploaded as a
    private asset, and a watermarked URL (logo and text overlay) is generated
    for public display.

    Args:
        file: Image file (multipart field "file")

    Returns:
        UploadResponse: Original URL, watermarked URL and Cloudinary public ID

    Raises:
        HTTPException: 400 if the file is missing or not an image,
            500 if the upload or watermarking fails
    """
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid file type", "detail": f"{file.filename} is not an image"}
        )

    content = await file.read()
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "No file provided", "detail": "Uploaded file is empty"}
        )

    converted, converted_ok = await convert_to_webp(content)
    if not converted_ok:
        logger.warning(f"WebP conversion failed for {file.filename}, uploading original format")

    try:
        result = await upload_image(converted)
    except Exception as e:
        logger.error(f"Error uploading {file.filename} to Cloudinary: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to upload image", "detail": str(e)}
        )

    watermarked_url = generate_watermarked_url(result["url"])
    if not watermarked_url:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to generate watermarked image", "detail": result["public_id"]}
        )

    logger.info(f"User {user.user_id} uploaded {file.filename} as {result['public_id']}")
    return UploadResponse(
        original_url=result["url"],
        watermarked_url=watermarked_url,
        public_id=result["public_id"],
    )
