from unittest import TestCase, mock

from django.test import override_settings

from . import app_settings
from .settings import settings as fallback_settings


class VehicleSettings(app_settings.AppSettings):
    TIMEOUT = 30
    label = "car"
    VEHICLE__WHEELS = 4
    VEHICLE__FUEL = "petrol"
    flavour__sweet = True


class AppSettingsTest(TestCase):
    def setUp(self):
        self.django_settings = mock.NonCallableMock(spec=[])
        self.django_settings.TIMEOUT = 60
        self.django_settings.label = "project label"
        self.django_settings.VEHICLE = {"FUEL": "electric", "SEATS": 2}
        patcher = mock.patch.object(
            app_settings, "django_settings", self.django_settings
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        self.settings = VehicleSettings()

    def test_dict_names_upper_case_only(self):
        self.assertEqual(self.settings._dict_names(), ["VEHICLE"])
        # Worked out once per instance.
        self.assertIs(self.settings._dict_names(), self.settings._dict_names())

    def test_lower_case_prefix_is_not_a_dict(self):
        with self.assertRaises(AttributeError):
            self.settings.flavour
        self.assertIs(self.settings.flavour__sweet, True)

    def test_upper_case_passthrough(self):
        self.assertEqual(self.settings.TIMEOUT, 60)
        del self.django_settings.TIMEOUT
        self.assertEqual(self.settings.TIMEOUT, 30)

    def test_lower_case_is_local(self):
        self.assertEqual(self.settings.label, "car")

    def test_dict_key(self):
        self.assertEqual(self.settings.VEHICLE__FUEL, "electric")
        self.assertEqual(self.settings.VEHICLE__WHEELS, 4)
        self.assertEqual(self.settings.VEHICLE__SEATS, 2)
        with self.assertRaises(AttributeError):
            self.settings.VEHICLE__DOORS

    def test_dict_merges_project_values(self):
        self.assertEqual(
            self.settings.VEHICLE, {"WHEELS": 4, "FUEL": "electric", "SEATS": 2}
        )

    def test_project_dict_unset(self):
        self.django_settings.VEHICLE = None
        self.assertEqual(self.settings.VEHICLE__FUEL, "petrol")
        self.assertEqual(self.settings.VEHICLE, {"WHEELS": 4, "FUEL": "petrol"})


class FallbackSettingsTest(TestCase):
    def test_defaults(self):
        self.assertEqual(fallback_settings.FALLBACK_IMAGES__EXT, "webp")
        self.assertEqual(fallback_settings.FALLBACK_IMAGES__LOADING, "lazy")
        self.assertIs(fallback_settings.FALLBACK_IMAGES__REQUIRE_EXTENSION, False)
        self.assertIs(fallback_settings.FALLBACK_IMAGES__LOG_SIGNALS, True)

    @override_settings(FALLBACK_IMAGES={"EXT": "avif"})
    def test_project_override(self):
        self.assertEqual(fallback_settings.FALLBACK_IMAGES__EXT, "avif")
        self.assertEqual(
            fallback_settings.FALLBACK_IMAGES,
            {
                "EXT": "avif",
                "LOADING": "lazy",
                "REQUIRE_EXTENSION": False,
                "LOG_SIGNALS": True,
            },
        )
