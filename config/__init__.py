"""Settings selection: one module per environment, chosen by APP_ENV."""
from __future__ import annotations

import importlib
import os
from types import ModuleType
from typing import Optional

ENVIRONMENTS = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    """Unknown or missing APP_ENV values fall back to development."""
    env = os.getenv("APP_ENV", "development").strip().lower()
    return ENVIRONMENTS.get(env, "config.development")


def load_settings(settings_module: Optional[str] = None) -> ModuleType:
    return importlib.import_module(settings_module or get_settings_module())
