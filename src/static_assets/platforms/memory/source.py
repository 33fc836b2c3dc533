"""In-memory source.

Holds a generated asset tree as plain data, for previewing manifests from a
planned set of outputs and for exercising the pipeline without a disk tree.
"""

from collections.abc import Mapping, Sequence

from ...sources.base import Source


class MemorySource(Source):
    """Source backed by a nested mapping.

    Example:
        >>> source = MemorySource({"acme": {"logos": ["logo.svg", "logo-32.png"]}})
        >>> source.list_files("acme", "logos")
        ['logo.svg', 'logo-32.png']
    """

    def __init__(
        self,
        tree: Mapping[str, Mapping[str, Sequence[str]]],
        metadata: Mapping[str, str] | None = None,
    ):
        """Initialize the source.

        Args:
            tree: brand id -> asset type -> filenames, in discovery order
            metadata: brand id -> raw metadata document
        """
        self.tree = {brand: {t: list(files) for t, files in types.items()} for brand, types in tree.items()}
        self.metadata = dict(metadata or {})

    def list_brands(self) -> list[str]:
        return list(self.tree)

    def list_asset_types(self, brand_id: str) -> list[str]:
        return list(self.tree.get(brand_id, {}))

    def list_files(self, brand_id: str, asset_type: str) -> list[str]:
        return list(self.tree.get(brand_id, {}).get(asset_type, []))

    def read_metadata(self, brand_id: str) -> str | None:
        return self.metadata.get(brand_id)

    def describe_metadata(self, brand_id: str) -> str | None:
        return f"memory://{brand_id}/meta.json" if brand_id in self.metadata else None
