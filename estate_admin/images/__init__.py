"""
Image processing module for uploads.
Validates web image formats and scales oversized photos down.
"""

from .processor import ImageProcessor, InvalidImageError

__all__ = ['ImageProcessor', 'InvalidImageError']
