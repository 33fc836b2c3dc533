"""Validation of source assets before building.

Checks:
- File naming conventions (kebab-case)
- Minimum resolution for raster images
- Recommended files exist
- Configured brands have source directories
- Source brand directories that are not configured
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

from .config import GenerationConfig

# Minimum (shortest side) resolution for raster sources, per asset type
MIN_RESOLUTION = {"logos": 512, "icons": 128, "images": 256}
DEFAULT_MIN_RESOLUTION = 256

# Recommended files per asset type
REQUIRED_FILES = {
    "logos": [re.compile(r"^logo\.(svg|png)$")],
    "icons": [re.compile(r"^icon\.(svg|png)$")],
}

VALID_EXTENSIONS = {".svg", ".png", ".jpg", ".jpeg", ".webp"}

# Kebab-case with optional variant suffixes
NAMING_PATTERN = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")


@dataclass(frozen=True)
class Issue:
    message: str
    path: Path | None = None


@dataclass
class ValidationReport:
    """Errors fail validation; warnings are advisory."""

    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)

    def error(self, message: str, path: Path | None = None) -> None:
        self.errors.append(Issue(message, path))

    def warning(self, message: str, path: Path | None = None) -> None:
        self.warnings.append(Issue(message, path))

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_naming(path: Path, report: ValidationReport) -> None:
    ext = path.suffix.lower()
    if ext not in VALID_EXTENSIONS:
        report.warning(f"Unsupported file extension: {ext or '(none)'}", path)
        return

    if not NAMING_PATTERN.match(path.stem):
        report.error(f"Invalid filename (use kebab-case): {path.name}", path)


def validate_resolution(path: Path, asset_type: str, report: ValidationReport) -> None:
    ext = path.suffix.lower()
    if ext == ".svg" or ext not in VALID_EXTENSIONS:
        return

    try:
        with Image.open(path) as img:
            width, height = img.size
    except OSError:
        report.error("Could not read image metadata", path)
        return

    min_res = MIN_RESOLUTION.get(asset_type, DEFAULT_MIN_RESOLUTION)
    if min(width, height) < min_res:
        report.warning(
            f"Low resolution ({width}x{height}), recommended minimum: {min_res}x{min_res}",
            path,
        )


def validate_required_files(type_dir: Path, asset_type: str, filenames: list[str], report: ValidationReport) -> None:
    for pattern in REQUIRED_FILES.get(asset_type, []):
        if not any(pattern.match(name) for name in filenames):
            report.warning(f"Missing recommended file matching {pattern.pattern}", type_dir)


def validate_brand_directory(config: GenerationConfig, brand_id: str, report: ValidationReport) -> None:
    brand_dir = config.source_brands_dir / brand_id
    if not brand_dir.is_dir():
        report.error(f"Brand directory not found: {brand_id}", brand_dir)
        return

    for asset_type in config.brands[brand_id]:
        type_dir = brand_dir / asset_type
        if not type_dir.is_dir():
            report.warning(f"Directory not found: {asset_type}", type_dir)
            continue

        files = sorted(p for p in type_dir.iterdir() if p.is_file())
        if not files:
            report.warning("Empty directory", type_dir)
            continue

        for path in files:
            validate_naming(path, report)
            validate_resolution(path, asset_type, report)

        validate_required_files(type_dir, asset_type, [p.name for p in files], report)


def check_orphaned_directories(config: GenerationConfig, report: ValidationReport) -> None:
    if not config.source_brands_dir.is_dir():
        return
    for entry in sorted(config.source_brands_dir.iterdir()):
        if entry.is_dir() and entry.name not in config.brands:
            report.warning("Orphaned brand directory (not in config)", entry)


def validate_sources(config: GenerationConfig) -> ValidationReport:
    """Validate every configured brand's source tree."""
    report = ValidationReport()
    for brand_id in config.brands:
        validate_brand_directory(config, brand_id, report)
    check_orphaned_directories(config, report)
    return report
