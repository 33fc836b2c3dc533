"""Configuration loading for the asset pipeline (assets.config.json)."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from .core.filenames import DEFAULT_POLICY, SizeSuffixPolicy
from .core.report import ConfigError
from .core.validator import describe_validation_error, validate_config

DEFAULT_CONFIG_NAME = "assets.config.json"

DEFAULT_VERSION = "v1"

DEFAULT_CONCURRENCY = 4

DEFAULT_BASE_URLS = {
    "github": "https://codefuturist.github.io/static-assets/",
    "jsdelivr": "https://cdn.jsdelivr.net/gh/codefuturist/static-assets@main/site/",
}


@dataclass(frozen=True)
class SizeSpec:
    """One configured output size.

    ``name`` becomes the filename suffix (``logo-{name}.png``); None means
    no suffix.
    """

    width: int
    name: str | None = None
    height: int | None = None

    @property
    def suffix(self) -> str:
        return f"-{self.name}" if self.name else ""


@dataclass
class QualityConfig:
    """Encoder quality per output format."""

    jpg: int = 80
    png: int = 80
    webp: int = 80
    avif: int = 60

    def for_format(self, fmt: str) -> int:
        return getattr(self, "jpg" if fmt == "jpeg" else fmt, 80)


@dataclass
class DefaultsConfig:
    sizes: list[SizeSpec] = field(default_factory=list)
    formats: list[str] = field(default_factory=lambda: ["original"])
    quality: QualityConfig = field(default_factory=QualityConfig)


@dataclass
class AssetTypeConfig:
    """Per brand, per asset type generation settings."""

    sizes: list[SizeSpec] | None = None
    formats: list[str] | None = None
    generate_retina: bool = False


@dataclass
class SvgOptions:
    """SVG minification settings (the ``svgo`` block of the config)."""

    remove_comments: bool = True
    remove_metadata: bool = True
    collapse_whitespace: bool = True
    float_precision: int | None = 3


@dataclass
class GenerationConfig:
    """Represents the settings defined in assets.config.json."""

    root: Path
    source_dir: Path
    output_dir: Path
    manifest_path: Path
    version: str = DEFAULT_VERSION
    concurrency: int = DEFAULT_CONCURRENCY
    strict_size_suffixes: bool = False
    base_urls: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BASE_URLS))
    brands: dict[str, dict[str, AssetTypeConfig]] = field(default_factory=dict)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    svg: SvgOptions = field(default_factory=SvgOptions)

    @property
    def source_brands_dir(self) -> Path:
        return self.source_dir / "brands"

    @property
    def output_brands_dir(self) -> Path:
        return self.output_dir / "brands"

    def metadata_path(self, brand_id: str) -> Path:
        return self.source_brands_dir / brand_id / "meta.json"

    def asset_type_config(self, brand_id: str, asset_type: str) -> AssetTypeConfig:
        return self.brands.get(brand_id, {}).get(asset_type) or AssetTypeConfig()

    def sizes_for(self, brand_id: str, asset_type: str) -> list[SizeSpec]:
        configured = self.asset_type_config(brand_id, asset_type).sizes
        return configured if configured else self.defaults.sizes

    def formats_for(self, brand_id: str, asset_type: str) -> list[str]:
        configured = self.asset_type_config(brand_id, asset_type).formats
        return configured if configured else self.defaults.formats

    def size_policy(self, brand_id: str, asset_type: str) -> SizeSuffixPolicy:
        """Filename size policy for one brand/type directory."""
        if not self.strict_size_suffixes:
            return DEFAULT_POLICY
        specs = self.sizes_for(brand_id, asset_type) + self.defaults.sizes
        return SizeSuffixPolicy.strict({int(s.name) for s in specs if s.name and s.name.isdigit()})


def _parse_sizes(data: Any) -> list[SizeSpec] | None:
    if data is None:
        return None
    sizes = []
    for entry in data:
        name = entry["name"] if "name" in entry else str(entry["width"])
        sizes.append(SizeSpec(width=entry["width"], name=name, height=entry.get("height")))
    return sizes


def _resolve(root: Path, value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else (root / path).resolve()


def parse_config(data: dict[str, Any], root: Path) -> GenerationConfig:
    """Build a GenerationConfig from decoded JSON.

    Raises:
        ConfigError: If the data does not match the configuration schema
    """
    try:
        validate_config(data)
    except ValidationError as e:
        raise ConfigError(describe_validation_error(e)) from e

    output_dir = _resolve(root, data["outputDir"])
    manifest_path = (
        _resolve(root, data["manifestPath"])
        if data.get("manifestPath")
        else output_dir.parent / "assets-manifest.json"
    )

    defaults_data = data.get("defaults", {})
    quality_data = defaults_data.get("quality", {})
    defaults = DefaultsConfig(
        sizes=_parse_sizes(defaults_data.get("sizes")) or [],
        formats=list(defaults_data.get("formats") or ["original"]),
        quality=QualityConfig(**{k: v for k, v in quality_data.items() if k in ("jpg", "png", "webp", "avif")}),
    )

    brands: dict[str, dict[str, AssetTypeConfig]] = {}
    for brand_id, types in data["brands"].items():
        brands[brand_id] = {
            asset_type: AssetTypeConfig(
                sizes=_parse_sizes(entry.get("sizes")),
                formats=entry.get("formats"),
                generate_retina=bool(entry.get("generateRetina", False)),
            )
            for asset_type, entry in types.items()
        }

    svgo = data.get("svgo", {})
    svg = SvgOptions(
        remove_comments=bool(svgo.get("removeComments", True)),
        remove_metadata=bool(svgo.get("removeMetadata", True)),
        collapse_whitespace=bool(svgo.get("collapseWhitespace", True)),
        float_precision=svgo.get("floatPrecision", 3),
    )

    return GenerationConfig(
        root=root,
        source_dir=_resolve(root, data["sourceDir"]),
        output_dir=output_dir,
        manifest_path=manifest_path,
        version=data.get("version", DEFAULT_VERSION),
        concurrency=data.get("concurrency", DEFAULT_CONCURRENCY),
        strict_size_suffixes=bool(data.get("strictSizeSuffixes", False)),
        base_urls=dict(data.get("baseUrls") or DEFAULT_BASE_URLS),
        brands=brands,
        defaults=defaults,
        svg=svg,
    )


def read_config_data(config_path: Path) -> dict[str, Any]:
    """Read the raw JSON configuration document.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object
    """
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain an object at the root")
    return data


def load_config(config_path: Path) -> GenerationConfig:
    """Load configuration from disk.

    Relative directories resolve against the directory holding the file.

    Raises:
        ConfigError: If the configuration cannot be read, parsed or validated
    """
    config_path = config_path.resolve()
    return parse_config(read_config_data(config_path), config_path.parent)
