"""
Image processor for listing, blog and hero uploads.
Checks that an upload is a web image and scales oversized photos down.
"""

import io
import logging
from typing import Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from ..api.config import Config
from ..models.upload import UploadFile


LOGGER = logging.getLogger(__name__)


class InvalidImageError(ValueError):
    """Raised when an upload is not an accepted image"""
    def __init__(self, name: str, message: str = None):
        self.name = name
        self.message = message or f"{name} is not a PNG, JPEG or WEBP image"
        super().__init__(self.message)


class ImageProcessor:
    """Process images before they are uploaded to storage."""

    # Formats the public site can display
    FORMATS = {
        'PNG': 'image/png',
        'JPEG': 'image/jpeg',
        'WEBP': 'image/webp',
    }

    # Re-encoding quality for lossy formats
    QUALITY = 90

    def __init__(self, max_width: Optional[int] = None):
        """
        Initialize the image processor.

        Args:
            max_width: Images wider than this are scaled down; 0 keeps every
                image at its original size. Defaults to Config.MAX_IMAGE_WIDTH.
        """
        self.max_width = Config.MAX_IMAGE_WIDTH if max_width is None else max_width

    def load_image(self, image_source: Union[bytes, Image.Image]) -> Image.Image:
        """
        Load an image from bytes or a PIL Image.

        Args:
            image_source: Raw file bytes or PIL Image

        Returns:
            PIL Image object (fully decoded)
        """
        if isinstance(image_source, Image.Image):
            return image_source.copy()

        img = Image.open(io.BytesIO(image_source))
        img.load()
        return img

    def inspect(self, upload: UploadFile) -> Tuple[str, Tuple[int, int]]:
        """
        Identify an upload.

        Returns:
            (format, (width, height))

        Raises:
            InvalidImageError: not decodable or not PNG/JPEG/WEBP
        """
        try:
            img = self.load_image(upload.content)
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidImageError(upload.name) from e

        if img.format not in self.FORMATS:
            raise InvalidImageError(upload.name)
        return img.format, img.size

    def resize_to_width(self, img: Image.Image, width: int) -> Image.Image:
        """Scale to ``width`` keeping the aspect ratio"""
        ratio = width / float(img.width)
        height = max(1, int(round(img.height * ratio)))
        return img.resize((width, height), Image.Resampling.LANCZOS)

    def to_bytes(self, img: Image.Image, fmt: str) -> bytes:
        """Encode an image in the given format"""
        output = io.BytesIO()
        if fmt == 'JPEG':
            if img.mode not in ('RGB', 'L'):
                img = img.convert('RGB')
            img.save(output, format=fmt, quality=self.QUALITY, optimize=True)
        elif fmt == 'WEBP':
            img.save(output, format=fmt, quality=self.QUALITY)
        else:
            img.save(output, format=fmt, optimize=True)
        return output.getvalue()

    def prepare(self, upload: UploadFile) -> UploadFile:
        """
        Validate an image upload and scale it down when it is too wide.

        Args:
            upload: File picked by the user

        Returns:
            Upload with the detected MIME type (and resized content if needed)
        """
        fmt, (width, height) = self.inspect(upload)
        content_type = self.FORMATS[fmt]

        if not self.max_width or width <= self.max_width:
            return UploadFile(name=upload.name, content=upload.content, content_type=content_type)

        img = self.load_image(upload.content)
        resized = self.resize_to_width(img, self.max_width)
        LOGGER.info(
            "Scaled %s from %dx%d to %dx%d",
            upload.name, width, height, resized.width, resized.height,
        )
        return UploadFile(name=upload.name, content=self.to_bytes(resized, fmt), content_type=content_type)
