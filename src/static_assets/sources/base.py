"""Base abstractions for generated-asset sources.

This module defines the interface that all sources must implement to feed
the manifest pipeline: a read-only view of a generated asset tree, organised
as brands -> asset types -> bare filenames, plus each brand's optional raw
metadata document.
"""

from abc import ABC, abstractmethod


class Source(ABC):
    """Abstract base class for all generated-asset sources.

    Implementations provide storage-specific logic for listing brands,
    asset type directories and files, while adhering to this common
    interface. Listings must be deterministic for unchanged input.
    """

    @abstractmethod
    def list_brands(self) -> list[str]:
        """List brand ids in discovery order.

        Returns:
            Brand ids available from this source
        """

    @abstractmethod
    def list_asset_types(self, brand_id: str) -> list[str]:
        """List asset type directories present for a brand.

        Args:
            brand_id: Brand to inspect

        Returns:
            Asset type names (may include unknown types; callers filter)
        """

    @abstractmethod
    def list_files(self, brand_id: str, asset_type: str) -> list[str]:
        """List bare filenames in one brand/type directory.

        Args:
            brand_id: Brand to inspect
            asset_type: Asset type directory

        Returns:
            Filenames in a stable order
        """

    @abstractmethod
    def read_metadata(self, brand_id: str) -> str | None:
        """Return the brand's raw metadata document, or None if it has none."""

    def describe_metadata(self, brand_id: str) -> str | None:
        """Human-readable location of the brand's metadata (for messages)."""
        return None

    def skipped_entries(self, brand_id: str, asset_type: str) -> list[tuple[str, str]]:
        """Entries the last list_files call left out, as (path, reason) pairs."""
        return []
