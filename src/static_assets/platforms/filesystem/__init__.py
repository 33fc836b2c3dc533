"""Filesystem platform for the manifest pipeline.

This platform reads a generated asset tree from a local directory.
"""

from pathlib import Path

from .source import FilesystemSource, validate_path_safety, validate_url

# Auto-register with the registry
from ...registry import SourceRegistry


def _create_filesystem_source(
    output_dir: Path, metadata_dir: Path | None = None, **kwargs
) -> FilesystemSource:
    """Factory function for creating filesystem sources.

    Args:
        output_dir: Generated output root (holding ``brands/``)
        metadata_dir: Directory holding ``{brandId}/meta.json`` files
        **kwargs: Additional parameters (unused for filesystem)

    Returns:
        FilesystemSource instance
    """
    return FilesystemSource(Path(output_dir), Path(metadata_dir) if metadata_dir else None)


# Auto-register at module import
SourceRegistry.register_factory('filesystem', _create_filesystem_source)

__all__ = [
    "FilesystemSource",
    "validate_path_safety",
    "validate_url",
]
