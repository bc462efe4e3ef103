"""Top-level package for Quiz Toolkit.

Provides subpackages:
- quiz_toolkit.core – document models, numbering, snapshot serialization
- quiz_toolkit.builder – layout (pagination), preview and PDF export
- quiz_toolkit.storage – session snapshot persistence
- quiz_toolkit.importing – plain-text import and starter templates
"""

def _get_version() -> str:
    """Version from the source checkout's pyproject.toml, else the installed metadata."""
    import re
    from importlib.metadata import PackageNotFoundError, version as dist_version
    from pathlib import Path

    checkout = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if checkout.is_file():
        found = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', checkout.read_text(encoding="utf-8"), re.M)
        if found:
            return found.group(1)

    try:
        return dist_version("quiz-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
