"""Manifest assembly.

This module walks a generated asset tree (brands -> asset types -> files)
through a Source, groups files into logical assets, merges brand metadata
and produces the manifest document. The pipeline is storage-agnostic and
delegates listing to the source.
"""

import json
import logging
import os
import re
import tempfile
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_BASE_URLS, DEFAULT_VERSION
from .core.filenames import DEFAULT_POLICY, SizeSuffixPolicy
from .core.grouping import group_variants
from .core.metadata import (
    EMPTY_METADATA,
    MetadataDocument,
    load_metadata_document,
    merge_asset,
    merge_brand,
    title_case,
    unknown_asset_types,
    unmatched_asset_keys,
)
from .core.report import ConfigError, OutputError, PipelineError, RunReport, WarningCategory
from .core.types import ASSET_TYPES, AssetTypeGroup, Brand, Manifest
from .core.validator import validate_manifest_with_error_details
from .platforms.filesystem.source import validate_url
from .sources.base import Source

logger = logging.getLogger(__name__)

BRAND_ID_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO 8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_base_urls(base_urls: dict[str, str], report: RunReport) -> dict[str, str]:
    """Validate CDN prefixes and make sure each ends with ``/``.

    Raises:
        ConfigError: If a prefix is not an absolute http(s) URL
    """
    normalized = {}
    for provider, url in base_urls.items():
        try:
            validate_url(url)
        except ValueError as e:
            raise ConfigError(f"Base URL for '{provider}': {e}") from e
        if not url.endswith("/"):
            report.warn(WarningCategory.CONFIG, f"Base URL for '{provider}' should end with '/': {url}")
            url += "/"
        normalized[provider] = url
    return normalized


class ManifestPipeline:
    """Builds a manifest from a generated asset source.

    Example:
        >>> from static_assets import SourceRegistry
        >>> pipeline = SourceRegistry.create_pipeline('filesystem', output_dir=Path('site/v1'))
        >>> manifest = pipeline.build_manifest()
        >>> [b['id'] for b in manifest['brands']]
        ['acme']
    """

    def __init__(
        self,
        source: Source,
        version: str = DEFAULT_VERSION,
        base_urls: dict[str, str] | None = None,
        size_policy: SizeSuffixPolicy = DEFAULT_POLICY,
        policy_resolver: Callable[[str, str], SizeSuffixPolicy] | None = None,
        clock: Callable[[], datetime] = utc_now,
        report: RunReport | None = None,
    ):
        """Initialize the pipeline.

        Args:
            source: Source listing the generated files
            version: Version tag used in the manifest and as path prefix
            base_urls: CDN provider -> URL prefix (defaults to the public CDNs)
            size_policy: Filename size-suffix policy for every directory
            policy_resolver: Optional per (brand, type) policy, overriding size_policy
            clock: Returns the generation timestamp
            report: Report receiving non-fatal warnings
        """
        self.source = source
        self.version = version
        self.report = report if report is not None else RunReport()
        self.base_urls = normalize_base_urls(dict(base_urls or DEFAULT_BASE_URLS), self.report)
        self.size_policy = size_policy
        self.policy_resolver = policy_resolver
        self.clock = clock

    def policy_for(self, brand_id: str, asset_type: str) -> SizeSuffixPolicy:
        if self.policy_resolver is not None:
            return self.policy_resolver(brand_id, asset_type)
        return self.size_policy

    def build_manifest(self, brand_ids: Iterable[str] | None = None) -> Manifest:
        """Assemble the complete manifest.

        Args:
            brand_ids: Optional subset of brands to include

        Returns:
            Manifest dictionary conforming to the JSON schema
        """
        discovered = self.source.list_brands()
        selected = discovered
        if brand_ids is not None:
            wanted = list(brand_ids)
            for missing in sorted(set(wanted) - set(discovered)):
                self.report.warn(WarningCategory.SOURCE, f"Brand '{missing}' has no generated assets")
            selected = [b for b in discovered if b in wanted]

        brands = []
        for brand_id in selected:
            brand = self.build_brand(brand_id)
            if brand is not None:
                brands.append(brand)

        return Manifest(
            generated=format_timestamp(self.clock()),
            version=self.version,
            baseUrls=dict(self.base_urls),
            brands=brands,
        )

    def build_brand(self, brand_id: str) -> Brand | None:
        """Assemble one brand, or None when it has no assets."""
        if not BRAND_ID_PATTERN.match(brand_id):
            self.report.warn(WarningCategory.SOURCE, f"Skipping brand with non kebab-case id '{brand_id}'")
            return None

        logger.info("Assembling brand %s", brand_id)
        metadata = self.load_metadata(brand_id)

        present = self.source.list_asset_types(brand_id)
        for unknown in present:
            if unknown not in ASSET_TYPES:
                self.report.warn(
                    WarningCategory.SOURCE,
                    f"Skipping unknown asset type directory '{unknown}' in brand '{brand_id}'",
                )

        groups: list[AssetTypeGroup] = []
        discovered: dict[str, list[str]] = {}
        for asset_type in ASSET_TYPES:
            if asset_type not in present:
                continue
            group = self.build_asset_type(brand_id, asset_type, metadata)
            if group is not None:
                groups.append(group)
                discovered[asset_type] = [a["id"] for a in group["assets"]]

        self._report_unmatched_metadata(brand_id, metadata, discovered)

        if not groups:
            logger.info("Brand %s has no assets, omitting", brand_id)
            return None

        name = title_case(brand_id)
        base = Brand(id=brand_id, name=name, displayName=name, assetTypes=groups)
        return merge_brand(base, metadata.brand)

    def load_metadata(self, brand_id: str) -> MetadataDocument:
        """Read and parse a brand's metadata; unreadable documents are reported and ignored."""
        origin = self.source.describe_metadata(brand_id)
        try:
            text = self.source.read_metadata(brand_id)
        except (OSError, UnicodeDecodeError) as e:
            self.report.warn(WarningCategory.CONFIG, f"Cannot read metadata for brand '{brand_id}': {e}", origin)
            return EMPTY_METADATA
        return load_metadata_document(text, brand_id, self.report, origin)

    def build_asset_type(
        self, brand_id: str, asset_type: str, metadata: MetadataDocument
    ) -> AssetTypeGroup | None:
        """Group and merge one brand/type directory, or None when it is empty."""
        files = self.source.list_files(brand_id, asset_type)
        for path, reason in self.source.skipped_entries(brand_id, asset_type):
            self.report.warn(WarningCategory.SOURCE, f"Skipping {path}: {reason}", path)

        grouped = group_variants(
            files,
            brand_id,
            asset_type,
            version=self.version,
            policy=self.policy_for(brand_id, asset_type),
            report=self.report,
        )
        if not grouped:
            return None

        assets = [merge_asset(asset, metadata.asset(asset_type, asset_id)) for asset_id, asset in grouped.items()]
        return AssetTypeGroup(type=asset_type, assets=assets)

    def _report_unmatched_metadata(
        self, brand_id: str, metadata: MetadataDocument, discovered: dict[str, list[str]]
    ) -> None:
        origin = self.source.describe_metadata(brand_id)
        for asset_type in unknown_asset_types(metadata):
            self.report.warn(
                WarningCategory.CONFIG,
                f"Metadata for brand '{brand_id}' names unknown asset type '{asset_type}'",
                origin,
            )
        for asset_type, asset_id in unmatched_asset_keys(metadata, discovered):
            if asset_type in ASSET_TYPES:
                self.report.warn(
                    WarningCategory.CONFIG,
                    f"Metadata for '{brand_id}/{asset_type}/{asset_id}' matches no generated asset",
                    origin,
                )


def serialize_manifest(manifest: Manifest) -> str:
    return json.dumps(manifest, indent=2, ensure_ascii=False, allow_nan=False) + "\n"


def write_manifest(manifest: Manifest, path: Path) -> Path:
    """Validate and atomically write a manifest.

    The manifest is written to a temporary file in the target directory and
    moved into place, so readers never observe a partial document.

    Raises:
        PipelineError: If the manifest fails schema validation or holds
            values JSON cannot represent (NaN, Infinity)
        OutputError: If the manifest cannot be written
    """
    is_valid, error_msg = validate_manifest_with_error_details(manifest)
    if not is_valid:
        raise PipelineError(f"Manifest validation failed: {error_msg}")

    try:
        text = serialize_manifest(manifest)
    except ValueError as e:
        raise PipelineError(f"Manifest is not valid JSON: {e}") from e

    temp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as f:
            temp_path = Path(f.name)
            f.write(text)
        os.replace(temp_path, path)
    except OSError as e:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise OutputError(f"Cannot write manifest {path}: {e}") from e

    logger.info("Wrote %s", path)
    return path
