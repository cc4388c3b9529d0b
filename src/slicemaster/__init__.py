"""Top-level package for SliceMaster 640.

Provides subpackages:
- slicemaster.images – raster wrapper, loading and resizing
- slicemaster.slicing – region geometry, extraction and PNG encoding
- slicemaster.output – ZIP archive packing and per-slice downloads
- slicemaster.pipeline – end-to-end run from source image to slices
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("slicemaster")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
