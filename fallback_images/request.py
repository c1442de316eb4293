from __future__ import annotations

import re
from typing import Any, NamedTuple

from typing_extensions import Unpack

from fallback_images.conf import settings
from fallback_images.types_ import ImageOptions, SizeVariant

size_re = re.compile(
    r"^(?P<w>\d*)x(?P<h>\d*)(?::(?P<ext>\w+))?(?:@(?P<dens>\d+(?:\.\d+)?)x)?$"
)


class ImageRequest(NamedTuple):
    """What to show in one image slot."""

    src: str
    alt: str = ""
    w: int = 0
    h: int = 0
    ext: str | None = "webp"
    sizes: tuple[SizeVariant, ...] = ()
    loading: str = "lazy"

    @classmethod
    def from_options(cls, src: str, **options: Unpack[ImageOptions]) -> ImageRequest:
        """
        Build a request from loose options, as they arrive from templates or
        the command line.

        Missing ``ext`` and ``loading`` options use the ``FALLBACK_IMAGES``
        settings. Raises ``ValueError`` for unknown or invalid options.
        """
        unknown = set(options) - set(cls._fields)
        if unknown:
            raise ValueError(f"Unknown image options: {', '.join(sorted(unknown))}")
        if "ext" in options:
            ext = cls.parse_ext(options["ext"])
        else:
            ext = cls.parse_ext(settings.FALLBACK_IMAGES__EXT)
        return cls(
            src=cls.parse_src(src),
            alt=str(options.get("alt") or ""),
            w=cls.parse_dimension(options.get("w"), "width"),
            h=cls.parse_dimension(options.get("h"), "height"),
            ext=ext,
            sizes=cls.parse_sizes(options.get("sizes")),
            loading=str(options.get("loading") or settings.FALLBACK_IMAGES__LOADING),
        )

    @property
    def candidate_key(self) -> tuple[str, str | None, int, int]:
        """The fields which decide the candidate list."""
        return (self.src, self.ext, self.w, self.h)

    @staticmethod
    def parse_src(value) -> str:
        if value is None:
            return ""
        # Accept FieldFile and friends.
        url = getattr(value, "url", value)
        return str(url)

    @staticmethod
    def parse_dimension(value, name: str = "dimension") -> int:
        if value is None or value == "":
            return 0
        if isinstance(value, bool):
            raise ValueError(f"Invalid {name} value {value}")
        try:
            number = int(value)
        except (ValueError, TypeError):
            raise ValueError(f"Invalid {name} value {value}")
        if number < 0:
            raise ValueError(f"Invalid {name} value {value}")
        return number

    @staticmethod
    def parse_ext(value) -> str | None:
        if value is None:
            return None
        ext = str(value).lstrip(".")
        return ext or None

    @staticmethod
    def parse_density(value) -> int | float | None:
        if value is None or value == "":
            return None
        try:
            density = float(value)
        except (ValueError, TypeError):
            raise ValueError(f"Invalid density value {value}")
        if density <= 0:
            raise ValueError(f"Invalid density value {value}")
        return int(density) if density.is_integer() else density

    @classmethod
    def parse_size_variant(cls, value: Any) -> SizeVariant:
        """
        Parse one size variant.

        Either a mapping with any of ``w``, ``h``, ``ext`` and ``dens``, or a
        string like ``"100x50"``, ``"100x50:avif"`` or ``"100x50@2x"``. An empty
        side (``"x50"``) leaves that dimension to the parent request.
        """
        if isinstance(value, str):
            match = size_re.match(value.strip())
            if not match:
                raise ValueError(f"Invalid size value {value}")
            value = {k: v for k, v in match.groupdict().items() if v}
        if not isinstance(value, dict):
            raise ValueError(f"Invalid size value {value}")
        unknown = set(value) - set(SizeVariant.__annotations__)
        if unknown:
            raise ValueError(
                f"Invalid size value {value}, unknown keys: {', '.join(sorted(unknown))}"
            )
        variant: SizeVariant = {}
        if value.get("w") is not None:
            variant["w"] = cls.parse_dimension(value["w"], "width")
        if value.get("h") is not None:
            variant["h"] = cls.parse_dimension(value["h"], "height")
        ext = cls.parse_ext(value.get("ext"))
        if ext:
            variant["ext"] = ext
        density = cls.parse_density(value.get("dens"))
        if density:
            variant["dens"] = density
        return variant

    @classmethod
    def parse_sizes(cls, value) -> tuple[SizeVariant, ...]:
        if not value:
            return ()
        if isinstance(value, str):
            value = [part for part in value.split(",") if part.strip()]
        elif isinstance(value, dict):
            value = [value]
        try:
            return tuple(cls.parse_size_variant(variant) for variant in value)
        except TypeError:
            raise ValueError(f"Invalid sizes value {value}")
