import logging

import django.dispatch

logger = logging.getLogger(__name__)

trying_candidate = django.dispatch.Signal()
"""
A signal sent when a ``FallbackController`` moves on to a new candidate after a
load failure.

* The ``sender`` argument will be the controller.
* The ``url`` argument will be the candidate URL now being tried.
"""

candidate_failed = django.dispatch.Signal()
"""
A signal sent when the host reports that the current candidate failed to load.

* The ``sender`` argument will be the controller.
* The ``url`` argument will be the candidate URL that failed.
"""

candidates_exhausted = django.dispatch.Signal()
"""
A signal sent (once per candidate list) when every candidate has failed.

* The ``sender`` argument will be the controller.
* The ``candidates`` argument will be the full list of candidate URLs.
"""


def log_trying_candidate(sender, url, **kwargs):
    logger.info("trying next URL: %s", url)


def log_candidate_failed(sender, url, **kwargs):
    logger.warning("candidate failed: %s", url)


def log_candidates_exhausted(sender, candidates, **kwargs):
    logger.error("all candidates failed: %s", ", ".join(candidates))


def connect_logging_receivers():
    """
    Log every fallback signal through the ``fallback_images.signals`` logger.
    """
    trying_candidate.connect(log_trying_candidate, dispatch_uid="fallback_images.log")
    candidate_failed.connect(log_candidate_failed, dispatch_uid="fallback_images.log")
    candidates_exhausted.connect(
        log_candidates_exhausted, dispatch_uid="fallback_images.log"
    )
