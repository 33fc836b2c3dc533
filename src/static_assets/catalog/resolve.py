"""Variant resolution: pick a concrete file for a requested format and size."""

from ..core.types import Asset, AssetFile, Manifest

# Formats in order of preference (most modern/compressed first)
FORMAT_PRIORITY: tuple[str, ...] = ("avif", "webp", "svg", "png", "jpg")


def best_format(asset: Asset) -> str | None:
    """First format in FORMAT_PRIORITY that the asset provides."""
    for fmt in FORMAT_PRIORITY:
        if fmt in asset["formats"]:
            return fmt
    return None


def _fallback(files: list[AssetFile]) -> AssetFile | None:
    """The original (size None) file, else the smallest size."""
    if not files:
        return None
    for f in files:
        if f["size"] is None:
            return f
    return min(files, key=lambda f: f["size"])  # type: ignore[arg-type,return-value]


def resolve_variant(asset: Asset, format: str | None = None, size: int | None = None) -> AssetFile | None:
    """Select the file for a requested format and size.

    An exact (format, size) match wins. Otherwise, among files of the
    requested format, the original is preferred, then the smallest size.
    Without a format, the first FORMAT_PRIORITY format the asset has is used.

    Args:
        asset: Asset to resolve
        format: Requested format, or None for the preferred one
        size: Requested pixel width, or None for the original

    Returns:
        Matching file, or None when the asset lacks the requested format
    """
    target = format or best_format(asset)
    if target is None:
        return None

    candidates = [f for f in asset["files"] if f["format"] == target]
    for f in candidates:
        if f["size"] == size:
            return f
    return _fallback(candidates)


def asset_url(manifest: Manifest, file: AssetFile, cdn: str = "jsdelivr") -> str:
    """Full URL of a file on a CDN.

    Raises:
        KeyError: If the manifest has no base URL for cdn
    """
    return manifest["baseUrls"][cdn] + file["path"]


def preview_file(asset: Asset) -> AssetFile | None:
    """File used for thumbnails: svg, else 128px png, else any png, else the first file."""
    files = asset["files"]
    for predicate in (
        lambda f: f["format"] == "svg",
        lambda f: f["format"] == "png" and f["size"] == 128,
        lambda f: f["format"] == "png",
    ):
        for f in files:
            if predicate(f):
                return f
    return files[0] if files else None
