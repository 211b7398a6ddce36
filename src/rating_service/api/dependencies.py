from functools import lru_cache
from importlib import metadata

import toml
from fastapi import Request

from rating_service.api.config import ApiSettings
from rating_service.core.paths import get_project_root_dir

DISTRIBUTION_NAME = "rating-service"


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings()


def get_app_settings(request: Request) -> ApiSettings:
    settings: ApiSettings = request.app.state.settings
    return settings


def _read_pyproject_version() -> str:
    root_dir = get_project_root_dir()
    with open(root_dir / "pyproject.toml") as f:
        data = toml.load(f)

    version = data.get("project", {}).get("version")

    if not version:
        raise ValueError("Version not found in pyproject.toml")

    assert isinstance(version, str)
    return version


@lru_cache(maxsize=1)
def get_version() -> str:
    """
    Version reported by the API.

    Taken from the installed distribution metadata; a source checkout
    that was never installed falls back to pyproject.toml.
    """
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return _read_pyproject_version()
