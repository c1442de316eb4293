from fallback_images.builder import build_resized_url, build_source_set
from fallback_images.controller import FallbackController
from fallback_images.request import ImageRequest

__all__ = [
    "FallbackController",
    "ImageRequest",
    "build_resized_url",
    "build_source_set",
]
