import asyncio
import logging
from io import BytesIO
from typing import Optional

from google import genai
from google.genai import types
from PIL import Image as PILImage

from ._constants import LOGGER_NAME
from .metrics import model_api_failure_count, model_api_success_count

logger = logging.getLogger(LOGGER_NAME)


class TokenImageGenerator:
    """Generates token logos and banners with Imagen and returns them as PNG bytes."""

    def __init__(self, api_key: Optional[str], model: str = "imagen-3.0-generate-002") -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model

    async def generate(self, prompt: str, width: int, height: int) -> Optional[bytes]:
        logger.info(f"Generating image {width}x{height} with prompt: {prompt}")
        try:
            response = await asyncio.to_thread(
                self._client.models.generate_images,
                model=self._model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    aspect_ratio=_aspect_ratio(width, height),
                ),
            )
            model_api_success_count.inc()
            raw_image = response.generated_images[0].image.image_bytes
        except Exception as e:
            model_api_failure_count.inc()
            logger.error(f"Error generating image: {e}")
            return None
        return _resize_png(raw_image, width, height)


def _aspect_ratio(width: int, height: int) -> str:
    # Imagen only accepts a fixed set of ratios
    ratio = width / height
    if ratio >= 1.5:
        return "16:9"
    if ratio <= 1 / 1.5:
        return "9:16"
    return "1:1"


def _resize_png(raw_image: bytes, width: int, height: int) -> Optional[bytes]:
    try:
        image = PILImage.open(BytesIO(raw_image), formats=["JPEG", "PNG"])
        output = BytesIO()
        image.resize((width, height)).save(output, format="PNG")
        return output.getvalue()
    except Exception as e:
        logger.error(f"Error resizing generated image: {e}")
        return None
