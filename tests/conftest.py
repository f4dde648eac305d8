#  Copyright (c) 2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
#
import os

import pytest

from gigapi.settings import reset_config
from .tutils import ENV_PREFIXES


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Every test starts with no gigapi variables and no process-wide configuration."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
