from django.conf import settings as django_settings


class AppSettings:
    """
    A holder for app-specific default settings (project settings have
    priority).

    Settings split with two underscores are looked up from project settings
    as a dictionary, for example::

        # In myapp.conf:
        class Settings(AppSettings):
            MYAPP__TASTE = 'sour'
            MYAPP__SCENT = 'apple'

        # In settings:
        MYAPP = {
            'TASTE': 'sweet',
        }

    Individual attributes can be retrieved, or entire underscored
    dictionaries::

        from myapp.conf import settings
        print(f"Tastes {settings.MYAPP__TASTE}")
        myapp_settings = settings.MYAPP
        print(f"Smells like {myapp_settings['SCENT']}")
    """

    def _dict_names(self) -> list[str]:
        try:
            return super().__getattribute__("_app_dicts")
        except AttributeError:
            names = []
            for key in dir(self):
                if key.startswith("_") or "__" not in key:
                    continue
                prefix = key.split("__", 1)[0]
                if prefix.isupper() and prefix not in names:
                    names.append(prefix)
            self._app_dicts = names
            return names

    def __getattribute__(self, attr):
        if attr.startswith("_"):
            return super().__getattribute__(attr)

        # A whole settings dictionary: project values win over the defaults.
        if attr in self._dict_names():
            prefix = f"{attr}__"
            settings_dict = dict(getattr(django_settings, attr, None) or {})
            for full_key in dir(self):
                if not full_key.startswith(prefix):
                    continue
                settings_dict.setdefault(
                    full_key[len(prefix) :], super().__getattribute__(full_key)
                )
            return settings_dict

        # A single key of a settings dictionary.
        if "__" in attr:
            dict_name, key = attr.split("__", 1)
            try:
                return getattr(django_settings, dict_name)[key]
            except (AttributeError, KeyError, TypeError):
                return super().__getattribute__(attr)

        # Upper case attributes pass through to the project settings.
        if attr == attr.upper():
            try:
                return getattr(django_settings, attr)
            except AttributeError:
                pass
        return super().__getattribute__(attr)
