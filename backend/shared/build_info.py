"""Build metadata exposed at runtime.

APP_VERSION comes from the environment in CI deployments and otherwise
from the installed distribution's metadata.
"""

import os
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "synctube-relay"


def _installed_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "dev"


APP_VERSION: str = os.environ.get("APP_VERSION") or _installed_version()
