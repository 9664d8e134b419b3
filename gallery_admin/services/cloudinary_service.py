"""
Cloudinary service for artwork image upload, watermarking, and removal.
Originals are stored as private assets; the public site only receives
watermarked delivery URLs built from Cloudinary transformations.
"""
import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from gallery_admin.config import settings
import asyncio
import logging
import re
from typing import Optional, Dict, Any, Tuple

logger = logging.getLogger(__name__)

# Configure Cloudinary with credentials from settings
cloudinary.config(
    cloud_name=settings.CLOUDINARY_CLOUD_NAME,
    api_key=settings.CLOUDINARY_API_KEY,
    api_secret=settings.CLOUDINARY_API_SECRET,
    secure=True  # Always use HTTPS for secure URLs
)

# Matches .../image/{upload|private}/[s--signature--/][v123/]{public_id}[.ext]
_DELIVERY_URL_PATTERN = re.compile(
    r"/image/(?P<type>upload|private)/(?:s--[^/]+--/)?(?:v\d+/)?"
    r"(?P<public_id>.+?)(?:\.(?:jpe?g|png|gif|webp|avif))?$",
    re.IGNORECASE,
)


async def upload_image(
    file: Any,
    folder: Optional[str] = None,
    max_retries: int = 3
) -> Dict[str, Any]:
    """
    Upload an artwork image to Cloudinary as a private asset, with retry logic.

    Args:
        file: File object, file path, data URI, or bytes to upload
        folder: Cloudinary folder path (default: settings.CLOUDINARY_UPLOAD_FOLDER)
        max_retries: Maximum number of attempts for transient failures

    Returns:
        dict: Upload result containing url, public_id, format, width, height, bytes

    Raises:
        CloudinaryError: If upload fails after all retries
    """
    folder = folder or settings.CLOUDINARY_UPLOAD_FOLDER

    for attempt in range(max_retries):
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.upload,
                file,
                folder=folder,
                resource_type="image",
                type="private",
            )

            logger.info(f"Successfully uploaded image: {result['public_id']}")

            return {
                "url": result["secure_url"],
                "public_id": result["public_id"],
                "format": result.get("format"),
                "width": result.get("width"),
                "height": result.get("height"),
                "bytes": result.get("bytes"),
            }

        except CloudinaryError as e:
            logger.warning(f"Cloudinary upload error (attempt {attempt + 1}/{max_retries}): {str(e)}")

            if attempt < max_retries - 1:
                await asyncio.sleep(2 ** attempt)  # 1s, 2s, 4s backoff
                continue

            logger.error(f"Cloudinary upload failed after {max_retries} attempts: {str(e)}")
            raise


async def delete_image(public_id: str, image_type: str = "private", max_retries: int = 3) -> Dict[str, Any]:
    """
    Delete an image from Cloudinary with retry logic and CDN invalidation.

    Raises:
        CloudinaryError: If deletion fails after all retries
    """
    for attempt in range(max_retries):
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.destroy,
                public_id,
                invalidate=True,
                resource_type="image",
                type=image_type,
            )

            if result.get("result") in ("ok", "not found"):
                logger.info(f"Deleted image from Cloudinary: {public_id} (result: {result.get('result')})")
            else:
                logger.warning(f"Unexpected Cloudinary delete result for {public_id}: {result}")
            return result

        except CloudinaryError as e:
            logger.warning(f"Cloudinary delete error (attempt {attempt + 1}/{max_retries}) for {public_id}: {str(e)}")

            if attempt < max_retries - 1:
                await asyncio.sleep(2 ** attempt)
                continue

            logger.error(f"Cloudinary delete failed after {max_retries} attempts for {public_id}: {str(e)}")
            raise


def extract_public_id(delivery_url: str) -> Tuple[str, str]:
    """
    Extract the public_id and delivery type from a Cloudinary URL.

    Examples:
        https://res.cloudinary.com/demo/image/upload/v17/artworks/sunset.jpg
            -> ("artworks/sunset", "upload")
        https://res.cloudinary.com/demo/image/private/s--x1--/v17/artworks/private/ab12.webp
            -> ("artworks/private/ab12", "private")

    Raises:
        ValueError: If the URL is not a Cloudinary image URL
    """
    match = _DELIVERY_URL_PATTERN.search(delivery_url.split("?", 1)[0])
    if not match:
        raise ValueError(f"Invalid Cloudinary URL format: {delivery_url}")
    return match.group("public_id"), match.group("type").lower()


def watermark_transformation(
    logo_opacity: int = 20,
    logo_width: int = 175,
    text: Optional[str] = None,
    text_opacity: int = 30,
    font_family: str = "verdana",
    font_size: int = 28,
    text_color: str = "white",
) -> list:
    """Resize limit, centred logo overlay, and a text overlay near the bottom edge."""
    return [
        {"width": 1200, "height": 800, "crop": "limit", "quality": "auto:best"},
        {
            "overlay": settings.WATERMARK_LOGO_PUBLIC_ID,
            "opacity": logo_opacity,
            "width": logo_width,
            "gravity": "center",
        },
        {
            "overlay": {
                "font_family": font_family,
                "font_size": font_size,
                "text": text or settings.WATERMARK_TEXT,
            },
            "color": text_color,
            "opacity": text_opacity,
            "gravity": "south",
            "y": 50,
        },
    ]


def generate_watermarked_url(original_url: str, **watermark_options) -> Optional[str]:
    """
    Build the watermarked delivery URL for an uploaded artwork image.

    Args:
        original_url: Cloudinary URL returned by upload_image
        **watermark_options: Overrides passed to watermark_transformation

    Returns:
        str: Watermarked HTTPS URL, or None if the URL is not a Cloudinary image
    """
    try:
        public_id, image_type = extract_public_id(original_url)
    except ValueError as e:
        logger.error(f"Could not extract public ID from URL: {str(e)}")
        return None

    return cloudinary.CloudinaryImage(public_id).build_url(
        transformation=watermark_transformation(**watermark_options),
        type=image_type,
        sign_url=image_type == "private",
        secure=True,
    )


def validate_cloudinary_config() -> bool:
    """
    Validate that Cloudinary is properly configured.

    Returns:
        bool: True if Cloudinary is configured, False otherwise
    """
    if not settings.CLOUDINARY_CLOUD_NAME:
        logger.warning("CLOUDINARY_CLOUD_NAME not configured")
        return False
    if not settings.CLOUDINARY_API_KEY:
        logger.warning("CLOUDINARY_API_KEY not configured")
        return False
    if not settings.CLOUDINARY_API_SECRET:
        logger.warning("CLOUDINARY_API_SECRET not configured")
        return False

    logger.info("Cloudinary configuration validated successfully")
    return True
