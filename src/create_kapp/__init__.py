"""create-kapp: interactive project scaffolding from GitHub template archives."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("create-kapp")
except PackageNotFoundError:
    __version__ = "0.0.0"
