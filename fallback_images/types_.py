from __future__ import annotations

from typing import Literal, TypeAlias, TypedDict

LoadingChoices: TypeAlias = Literal["lazy", "eager", "auto"]


class SizeVariant(TypedDict, total=False):
    w: int
    h: int
    ext: str
    # Only used when rendering a source set:
    dens: int | float


class ImageOptions(TypedDict, total=False):
    alt: str
    w: int | str
    h: int | str
    ext: str | None
    sizes: list[SizeVariant] | tuple[SizeVariant, ...]
    loading: LoadingChoices | str


class UpdateOptions(ImageOptions, total=False):
    src: str
