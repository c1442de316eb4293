"""
Build resized-image URLs.

Resized variants live beside their source, with the size tag inserted before
the extension::

    >>> build_resized_url("/img/photo.jpg", 100, 50, "webp")
    '/img/photo__100x50.webp'

Nothing here touches storage or the network: the functions only build strings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from fallback_images.conf import settings
from fallback_images.types_ import SizeVariant

if TYPE_CHECKING:
    from fallback_images.request import ImageRequest

DEFAULT_VARIANT_EXT = "webp"


def split_extension(src: str) -> tuple[str, str]:
    """
    Split ``src`` at its last ``.`` into the base and the extension (which
    keeps its leading dot).

    Only the last path segment can hold the extension. A source whose last
    segment has no dot is all base and has an empty extension, unless the
    ``REQUIRE_EXTENSION`` setting is on, in which case ``ValueError`` is raised.
    """
    if "." not in src.rpartition("/")[2]:
        if settings.FALLBACK_IMAGES__REQUIRE_EXTENSION:
            raise ValueError(f"Invalid source value {src!r}, no file extension")
        return src, ""
    base, _, original_ext = src.rpartition(".")
    return base, f".{original_ext}"


def build_resized_url(
    src: str,
    w: int | None = None,
    h: int | None = None,
    ext: str | None = None,
    dens: int | float | None = None,
) -> str:
    """
    Return the URL of ``src`` resized to ``w`` x ``h``.

    :param src: The source path or URL.
    :param w: Target width. No size tag is added unless both ``w`` and ``h``
        are set (a ``0`` counts as unset).
    :param h: Target height.
    :param ext: Extension (without the dot) to use instead of the source's own.
    :param dens: Pixel density; appends a ``" 2x"`` style descriptor for use in
        a ``srcset``.
    """
    base, original_ext = split_extension(src)
    size_tag = f"__{w}x{h}" if w and h else ""
    extension = f".{ext}" if ext else original_ext
    density = f" {dens}x" if dens else ""
    return f"{base}{size_tag}{extension}{density}"


def swap_extension(src: str, ext: str | None) -> str:
    """Return ``src`` with its extension replaced (unchanged if no ``ext``)."""
    return build_resized_url(src, 0, 0, ext)


def build_source_set(src: str, variants: Iterable[SizeVariant]) -> str:
    """
    Render a ``srcset`` attribute value with one resized URL per variant.

    A variant's missing fields are simply left out of its URL (so a variant
    with no ``ext`` keeps the source's extension).
    """
    return ", ".join(
        build_resized_url(
            src,
            variant.get("w"),
            variant.get("h"),
            variant.get("ext"),
            variant.get("dens"),
        )
        for variant in variants
    )


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


def resolve_variant(variant: SizeVariant, request: ImageRequest) -> SizeVariant:
    """
    Fill a size variant's missing ``w``, ``h`` and ``ext`` from ``request``.

    The extension falls back to the request's, then to ``"webp"``.
    """
    resolved: SizeVariant = {
        "w": _first_set(variant.get("w"), request.w),
        "h": _first_set(variant.get("h"), request.h),
        "ext": _first_set(variant.get("ext"), request.ext, DEFAULT_VARIANT_EXT),
    }
    if variant.get("dens"):
        resolved["dens"] = variant["dens"]
    return resolved


def build_candidates(request: ImageRequest) -> list[str]:
    """
    Return the ordered list of URLs to try for ``request``.

    The list starts with the extension-swapped source resized to the request
    size, then one URL per size variant (in order), and ends with the
    extension-swapped source at its original size. Repeated URLs only keep
    their first position.
    """
    if not request.src:
        return []
    source = swap_extension(request.src, request.ext)
    candidates = [build_resized_url(source, request.w, request.h)]
    for variant in request.sizes:
        resolved = resolve_variant(variant, request)
        candidates.append(
            build_resized_url(source, resolved["w"], resolved["h"], resolved["ext"])
        )
    candidates.append(source)
    return list(dict.fromkeys(candidates))
