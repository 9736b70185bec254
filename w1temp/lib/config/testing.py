"""Settings injection for the test suite.

Tests point the logger at a fake sysfs tree and temporary stores through
set_settings() instead of patching environment variables. Not for use
outside tests.
"""

import w1temp.lib.config.settings as _settings_module
from w1temp.lib.config.settings import Settings, _load_settings


def set_settings(settings: Settings | None) -> None:
    """Make get_settings() return settings, or reload from env when None.

    The environment cache is dropped either way, so a later load picks up
    variables patched by the test.
    """
    _settings_module._settings_override = settings
    _load_settings.cache_clear()
