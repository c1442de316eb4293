from .app_settings import AppSettings


class Settings(AppSettings):
    """
    These default settings for fallback-images can be specified in your Django
    project's settings to alter the behaviour of fallback-images.

    Settings may be specified on the project as part of a ``FALLBACK_IMAGES``
    dictionary (minus the ``'FALLBACK_IMAGES__'`` prefix).
    """

    FALLBACK_IMAGES__EXT = "webp"
    """
    The extension every candidate is swapped to unless a request passes its own
    ``ext``. Set to ``None`` to keep the source's extension.
    """

    FALLBACK_IMAGES__LOADING = "lazy"
    """
    The ``loading`` hint rendered on the ``<img>`` tag when a request doesn't
    give one.
    """

    FALLBACK_IMAGES__REQUIRE_EXTENSION = False
    """
    Sources are split at their last ``.`` to find the extension. A source
    without one is normally treated as all base name; set this to ``True`` to
    raise a ``ValueError`` for such sources instead.
    """

    FALLBACK_IMAGES__LOG_SIGNALS = True
    """
    Connect receivers which log the ``trying_candidate``, ``candidate_failed``
    and ``candidates_exhausted`` signals through the ``fallback_images.signals``
    logger.
    """


settings = Settings()
