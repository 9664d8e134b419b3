"""
Image conversion utility for artwork uploads.
Re-encodes images as WebP before they are sent to Cloudinary.
"""
import asyncio
import io
import logging
from typing import Optional, Tuple
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_WEBP_QUALITY = 85  # Balance between quality and file size (0-100)
DEFAULT_WEBP_METHOD = 6    # Compression method (0-6, higher = better compression but slower)
MAX_DIMENSION = 3840       # Longest edge before downscaling


def _normalize_mode(image: Image.Image) -> Image.Image:
    # WebP keeps alpha, so palette images become RGBA; CMYK, grayscale and others become RGB
    if image.mode in ("P", "LA"):
        return image.convert("RGBA")
    if image.mode in ("RGB", "RGBA"):
        return image
    if image.mode not in ("CMYK", "L"):
        logger.warning(f"Unusual image mode '{image.mode}', converting to RGB")
    return image.convert("RGB")


def _downscale(image: Image.Image, max_dimension: int) -> Image.Image:
    width, height = image.size
    if width <= max_dimension and height <= max_dimension:
        return image

    scale = max_dimension / max(width, height)
    new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
    logger.info(f"Downscaling image from {width}x{height} to {new_size[0]}x{new_size[1]}")
    return image.resize(new_size, Image.Resampling.LANCZOS)


def encode_webp(
    image_bytes: bytes,
    quality: int = DEFAULT_WEBP_QUALITY,
    method: int = DEFAULT_WEBP_METHOD,
    max_dimension: Optional[int] = MAX_DIMENSION,
) -> bytes:
    """
    Re-encode image bytes as WebP.

    Raises:
        UnidentifiedImageError: If the bytes are not a readable image
    """
    image = Image.open(io.BytesIO(image_bytes))
    if image.format == "WEBP":
        return image_bytes

    image = _normalize_mode(image)
    if max_dimension:
        image = _downscale(image, max_dimension)

    buffer = io.BytesIO()
    save_kwargs = {"format": "WEBP", "quality": quality, "method": method}
    if quality == 100:
        save_kwargs["lossless"] = True
    image.save(buffer, **save_kwargs)
    return buffer.getvalue()


async def convert_to_webp(
    image_bytes: bytes,
    quality: int = DEFAULT_WEBP_QUALITY,
    max_dimension: Optional[int] = MAX_DIMENSION,
) -> Tuple[bytes, bool]:
    """
    Convert an upload to WebP without blocking the event loop.

    Args:
        image_bytes: Original image file bytes
        quality: WebP quality (0-100, default: 85)
        max_dimension: Longest edge before downscaling (None to disable)

    Returns:
        Tuple[bytes, bool]:
            - Bytes to upload: the WebP version, or the original if conversion
              failed or did not make the file smaller
            - Whether a usable WebP version was produced
    """
    try:
        webp_bytes = await asyncio.to_thread(
            encode_webp, image_bytes, quality, DEFAULT_WEBP_METHOD, max_dimension
        )
    except UnidentifiedImageError as e:
        logger.warning(f"Cannot identify image format: {str(e)}")
        return image_bytes, False
    except (OSError, ValueError) as e:
        logger.error(f"Error converting image to WebP: {str(e)}", exc_info=True)
        return image_bytes, False

    original_size = len(image_bytes)
    converted_size = len(webp_bytes)
    if converted_size >= original_size:
        logger.debug("WebP conversion did not reduce size, keeping original bytes")
        return image_bytes, True

    logger.info(
        f"Converted image to WebP: {original_size:,} bytes -> {converted_size:,} bytes "
        f"({(original_size - converted_size) / original_size * 100:.1f}% reduction, quality={quality})"
    )
    return webp_bytes, True
