"""cwgen package: control model for SoC cosine-wave tone generators."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("cwgen")
except PackageNotFoundError:  # pragma: no cover - during local dev without install
    __version__ = "0.0.0"

__all__ = ["__version__"]
