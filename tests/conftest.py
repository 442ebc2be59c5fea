import os

import pytest


# List of environment variables that may be modified by tests
_ENV_VARS_TO_ISOLATE = [
    "LOG_LEVEL",
    "LOG_FORMAT",
    "DEFAULT_MODE",
    "DEFAULT_DIMENSION",
    "DEFAULT_GENERAL_CLASS",
    "DEFAULT_FIT_CATEGORY",
    "DEFAULT_FIT_CLASS",
]


@pytest.fixture(autouse=True)
def env_isolation():
    """Isolate environment variables between tests."""
    backup = {k: os.environ.get(k) for k in _ENV_VARS_TO_ISOLATE}
    try:
        yield
    finally:
        for k, v in backup.items():
            if v is None:
                os.environ.pop(k, None)
            else:
                os.environ[k] = v


@pytest.fixture(autouse=True)
def config_cache_isolation():
    """Reset config settings cache between tests."""
    import tolcalc.core.config as cfg

    backup_cache = cfg._settings_cache
    cfg.reset_settings_cache()
    yield
    cfg._settings_cache = backup_cache
