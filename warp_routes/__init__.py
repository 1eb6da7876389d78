"""Top-level package for warp route discovery."""

from importlib import metadata


def __getattr__(name: str) -> str:
    """Expose the package version via ``warp_routes.__version__``."""
    if name == "__version__":
        try:
            return metadata.version("warp-routes")
        except metadata.PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)


__all__ = ["__version__"]
