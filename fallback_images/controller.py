from __future__ import annotations

import logging

from typing_extensions import Unpack

from fallback_images.builder import build_candidates
from fallback_images.request import ImageRequest
from fallback_images.signals import (
    candidate_failed,
    candidates_exhausted,
    trying_candidate,
)
from fallback_images.types_ import ImageOptions, UpdateOptions

logger = logging.getLogger(__name__)


class FallbackController:
    """
    Step through the candidate URLs of one image slot as loads fail.

    The host renders ``current_url`` and reports back with
    :meth:`on_load_failure` whenever that URL fails to load. URLs that failed
    are remembered for the lifetime of the controller and skipped whenever
    they come up again, even after the candidate list is rebuilt.

    ``generation`` changes every time a new URL should be loaded, so the host
    can key its element on it (a repeated URL string still reloads) and pass
    it back to :meth:`on_load_failure` so stale callbacks are ignored.
    """

    request: ImageRequest
    candidates: list[str]
    index: int
    current_url: str
    generation: int
    failures: dict[str, bool]

    def __init__(self, request: ImageRequest):
        self.failures = {}
        self.generation = 0
        self.initialize(request)

    @classmethod
    def from_options(
        cls, src: str, **options: Unpack[ImageOptions]
    ) -> FallbackController:
        return cls(ImageRequest.from_options(src, **options))

    @property
    def render_key(self) -> int:
        return self.generation

    @property
    def is_exhausted(self) -> bool:
        """Every candidate has failed."""
        return self.index >= len(self.candidates)

    def initialize(self, request: ImageRequest):
        """
        Rebuild the candidates for ``request`` and start again from the first.

        The failure cache is kept.
        """
        candidates = build_candidates(request)
        self.request = request
        self.candidates = candidates
        self.index = 0
        self.current_url = candidates[0] if candidates else ""
        self.generation += 1

    def update(self, **changes: Unpack[UpdateOptions]):
        """
        Apply new options to the request.

        The candidates are only rebuilt when ``src``, ``ext``, ``w`` or ``h``
        change; otherwise the current position is kept.
        """
        fields = self.request._asdict()
        fields.update(changes)
        request = ImageRequest.from_options(**fields)
        if request.candidate_key != self.request.candidate_key:
            self.initialize(request)
        else:
            self.request = request

    def on_load_failure(self, generation: int | None = None):
        """
        Mark the current URL as failed and move on to the next candidate which
        isn't already known to fail.

        :param generation: The ``generation`` the failed load was started
            with. A failure reported for an older generation is ignored.

        A controller with no candidates (an empty ``src``) starts out exhausted,
        so this is a no-op for it and ``candidates_exhausted`` is never sent:
        nothing was tried.
        """
        if self.is_exhausted:
            return
        if generation is not None and generation != self.generation:
            logger.debug(
                "Ignoring load failure from generation %s (current is %s)",
                generation,
                self.generation,
            )
            return

        self.failures[self.current_url] = False
        candidate_failed.send(sender=self, url=self.current_url)

        self.index += 1
        while self.index < len(self.candidates):
            url = self.candidates[self.index]
            if self.failures.get(url) is False:
                self.index += 1
                continue
            self.current_url = url
            self.generation += 1
            trying_candidate.send(sender=self, url=url)
            return

        candidates_exhausted.send(sender=self, candidates=list(self.candidates))

    def render_attrs(self) -> dict[str, str]:
        """
        Attributes for the host's ``<img>`` element.
        """
        attrs = {"src": self.current_url, "alt": self.request.alt}
        if self.request.w:
            attrs["width"] = str(self.request.w)
        if self.request.h:
            attrs["height"] = str(self.request.h)
        if self.request.loading:
            attrs["loading"] = self.request.loading
        attrs["data-generation"] = str(self.generation)
        return attrs
