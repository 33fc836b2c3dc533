"""Variant grouping: fold generated files into logical assets.

All files of one (brand, asset type) directory are grouped by the asset id
encoded in their filenames. Formats and sizes accumulate in sets and are
sorted only when the asset is materialized, so the result does not depend on
the order of the listing.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from .filenames import DEFAULT_POLICY, FilenameError, ParsedFilename, SizeSuffixPolicy, parse_filename
from .metadata import title_case
from .report import RunReport, WarningCategory
from .types import Asset, AssetFile


def type_path(version: str, brand_id: str, asset_type: str) -> str:
    """Root-relative directory holding one brand's assets of one type."""
    return f"{version}/brands/{brand_id}/{asset_type}"


@dataclass
class VariantGroup:
    """Accumulator for the variants of one logical asset."""

    asset_id: str
    asset_type: str
    base_path: str
    formats: set[str] = field(default_factory=set)
    sizes: set[int] = field(default_factory=set)
    files: dict[tuple[str, int | None], AssetFile] = field(default_factory=dict)

    def add(self, parsed: ParsedFilename, filename: str, directory: str) -> AssetFile | None:
        """Add one file; return the record it replaced, if any."""
        key = (parsed.format, parsed.size)
        previous = self.files.get(key)

        self.formats.add(parsed.format)
        if parsed.size is not None:
            self.sizes.add(parsed.size)
        self.files[key] = AssetFile(
            file=filename,
            format=parsed.format,
            size=parsed.size,
            path=f"{directory}/{filename}",
        )
        return previous

    def to_asset(self) -> Asset:
        """Materialize the group as an asset without metadata overrides."""
        name = title_case(self.asset_id)
        return Asset(
            id=self.asset_id,
            name=name,
            displayName=name,
            type=self.asset_type,
            basePath=self.base_path,
            sizes=sorted(self.sizes),
            formats=sorted(self.formats),
            files=sorted(self.files.values(), key=lambda f: f["file"]),
        )


def group_variants(
    filenames: Iterable[str],
    brand_id: str,
    asset_type: str,
    version: str = "v1",
    policy: SizeSuffixPolicy = DEFAULT_POLICY,
    report: RunReport | None = None,
) -> dict[str, Asset]:
    """Group the files of one (brand, asset type) directory by asset id.

    Args:
        filenames: Bare filenames found in the directory
        brand_id: Brand the directory belongs to
        asset_type: Asset type of the directory (logos, icons, images)
        version: Manifest version used as the path prefix
        policy: Rule for treating trailing digit runs as sizes
        report: Optional report receiving integrity warnings

    Returns:
        Mapping of asset id to asset, in ascending id order
    """
    report = report if report is not None else RunReport()
    directory = type_path(version, brand_id, asset_type)
    groups: dict[str, VariantGroup] = {}

    for filename in filenames:
        try:
            parsed = parse_filename(filename, policy)
        except FilenameError as e:
            report.warn(WarningCategory.INTEGRITY, f"Skipping file: {e}", f"{directory}/{filename}")
            continue

        group = groups.get(parsed.asset_id)
        if group is None:
            group = VariantGroup(
                asset_id=parsed.asset_id,
                asset_type=asset_type,
                base_path=f"{directory}/{parsed.asset_id}",
            )
            groups[parsed.asset_id] = group

        replaced = group.add(parsed, filename, directory)
        if replaced is not None:
            report.warn(
                WarningCategory.INTEGRITY,
                f"Duplicate {parsed.format} variant (size={parsed.size}) for '{parsed.asset_id}': "
                f"'{filename}' replaces '{replaced['file']}'",
                directory,
            )

    return {asset_id: groups[asset_id].to_asset() for asset_id in sorted(groups)}
