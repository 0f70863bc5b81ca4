"""Package version: installed distribution metadata first, else the engine constant."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _package_version

from .main import fwxfpe


def resolve_version(distribution: str = "fwxfpe") -> str:
    try:
        found = _package_version(distribution)
    except PackageNotFoundError:
        return fwxfpe.ENGINE_VERSION
    return found or fwxfpe.ENGINE_VERSION


__version__ = resolve_version()


__all__ = ["__version__", "resolve_version"]
