"""Filesystem source.

This module provides a Source implementation that reads a generated asset
tree from disk:

    {output_dir}/brands/{brandId}/{assetType}/{file}
    {metadata_dir}/{brandId}/meta.json
"""

import logging
from pathlib import Path
from urllib.parse import urlparse

from ...sources.base import Source

logger = logging.getLogger(__name__)

METADATA_FILENAME = "meta.json"


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    This prevents path traversal through symlinks or crafted names.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        ValueError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise ValueError(f"Path {path} escapes base directory {base_dir}")


def validate_url(url: str) -> None:
    """Validate URL format and scheme.

    Only allows http:// and https:// schemes.

    Args:
        url: URL to validate

    Raises:
        ValueError: If URL has invalid format or dangerous scheme
    """
    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(
            f"Invalid URL: '{url}'. Only absolute http and https URLs are allowed."
        )


def _visible(entry: Path) -> bool:
    # Skip hidden files and system files
    return not entry.name.startswith(".")


class FilesystemSource(Source):
    """Source for a generated asset tree on disk.

    Example:
        >>> source = FilesystemSource(Path('site/v1'), Path('_source/brands'))
        >>> source.list_brands()
        ['acme', 'rey-it-solutions']
    """

    def __init__(self, output_dir: Path, metadata_dir: Path | None = None):
        """Initialize filesystem source.

        Args:
            output_dir: Generated output root (holding ``brands/``)
            metadata_dir: Directory holding ``{brandId}/meta.json`` files

        Raises:
            ValueError: If output_dir doesn't exist or isn't a directory
        """
        self.output_dir = output_dir.resolve()
        self.brands_dir = self.output_dir / "brands"
        self.metadata_dir = metadata_dir.resolve() if metadata_dir else None
        self._skipped: dict[tuple[str, str], list[tuple[str, str]]] = {}

        if not self.output_dir.exists():
            raise ValueError(f"Path does not exist: {self.output_dir}")

        if not self.output_dir.is_dir():
            raise ValueError(f"Path is not a directory: {self.output_dir}")

    def _subdirectories(self, directory: Path) -> list[str]:
        if not directory.is_dir():
            return []
        return sorted(entry.name for entry in directory.iterdir() if entry.is_dir() and _visible(entry))

    def list_brands(self) -> list[str]:
        """List brand directories, sorted by name."""
        return self._subdirectories(self.brands_dir)

    def list_asset_types(self, brand_id: str) -> list[str]:
        return self._subdirectories(self.brands_dir / brand_id)

    def list_files(self, brand_id: str, asset_type: str) -> list[str]:
        """List files directly inside one brand/type directory.

        Subdirectories are not descended into. Entries that resolve outside
        the output tree are skipped and reported by skipped_entries().
        """
        type_dir = self.brands_dir / brand_id / asset_type
        skipped = self._skipped[(brand_id, asset_type)] = []
        if not type_dir.is_dir():
            return []

        filenames = []
        for entry in sorted(type_dir.iterdir()):
            if not _visible(entry):
                continue
            try:
                validate_path_safety(entry, self.output_dir)
            except ValueError as e:
                logger.debug("Skipping %s: %s", entry, e)
                skipped.append((str(entry), str(e)))
                continue
            if entry.is_file():
                filenames.append(entry.name)
        return filenames

    def skipped_entries(self, brand_id: str, asset_type: str) -> list[tuple[str, str]]:
        return list(self._skipped.get((brand_id, asset_type), []))

    def metadata_path(self, brand_id: str) -> Path | None:
        if self.metadata_dir is None:
            return None
        return self.metadata_dir / brand_id / METADATA_FILENAME

    def read_metadata(self, brand_id: str) -> str | None:
        path = self.metadata_path(brand_id)
        if path is None or not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def describe_metadata(self, brand_id: str) -> str | None:
        path = self.metadata_path(brand_id)
        return str(path) if path else None
