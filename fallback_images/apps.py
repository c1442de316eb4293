from django.apps import AppConfig


class FallbackImagesConfig(AppConfig):
    name = "fallback_images"
    verbose_name = "Fallback images"

    def ready(self):
        from fallback_images.conf import settings
        from fallback_images.signals import connect_logging_receivers

        if settings.FALLBACK_IMAGES__LOG_SIGNALS:
            connect_logging_receivers()
