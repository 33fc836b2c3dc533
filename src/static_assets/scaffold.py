"""Brand scaffolding.

Creates a new brand's source directory structure, a starter metadata file
and a default entry in assets.config.json.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from .config import read_config_data
from .core.metadata import title_case
from .core.report import PipelineError

logger = logging.getLogger(__name__)

ASSET_DIRECTORIES = ("logos", "icons", "images")

DEFAULT_BRAND_CONFIG = {
    "logos": {
        "sizes": [{"name": str(w), "width": w, "height": w} for w in (16, 32, 48, 64, 128, 256, 512)],
        "formats": ["original", "webp", "avif", "png"],
    },
    "icons": {
        "sizes": [{"name": str(w), "width": w} for w in (16, 24, 32, 48, 64)],
    },
}

README_TEMPLATE = """# {title}

## Source Assets

Place your source files in the appropriate directories:

- `logos/` - Brand logos (SVG recommended, minimum 512x512 for rasters)
- `icons/` - Icons and symbols
- `images/` - Other brand images

## Naming Convention

Use kebab-case for all filenames:
- `logo.svg` - Primary logo
- `logo-dark.svg` - Logo for dark backgrounds
- `logo-on-brand.svg` - Logo with brand color background
- `icon.svg` - Primary icon

Avoid names ending in `-<digits>`: generated sizes use that suffix.

## Building

```bash
# Build only this brand
static-assets build --brand {brand_id}

# Build all brands
static-assets build
```
"""


class ScaffoldError(PipelineError):
    """Raised when a brand cannot be scaffolded."""


@dataclass
class ScaffoldResult:
    brand_id: str
    title: str
    created: list[Path] = field(default_factory=list)
    config_updated: bool = False


def to_kebab_case(text: str) -> str:
    """Example: "My Company" -> "my-company"."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def starter_metadata(title: str) -> dict:
    return {
        "brand": {"displayName": title, "description": "", "tags": [], "aliases": []},
        "assets": {
            "logos": {
                "logo": {"displayName": "Primary Logo", "tags": ["primary"], "aliases": ["logo"], "sortKey": 10},
                "logo-on-brand": {
                    "displayName": "Logo (On Brand)",
                    "tags": ["on-brand"],
                    "aliases": ["logo on brand"],
                    "sortKey": 20,
                },
            },
            "icons": {
                "icon": {"displayName": "App Icon", "tags": ["icon"], "aliases": ["favicon"], "sortKey": 10},
            },
        },
    }


def create_brand(config_path: Path, brand_name: str) -> ScaffoldResult:
    """Scaffold a new brand.

    Args:
        config_path: Path to assets.config.json
        brand_name: Brand name in any case ("Acme Corp" or "acme-corp")

    Returns:
        ScaffoldResult describing what was created

    Raises:
        ScaffoldError: If the name is empty or the brand directory exists
        ConfigError: If the configuration cannot be read
    """
    brand_id = to_kebab_case(brand_name)
    if not brand_id:
        raise ScaffoldError("Brand name is required")

    config_path = config_path.resolve()
    data = read_config_data(config_path)
    source_dir = Path(data.get("sourceDir", "_source"))
    if not source_dir.is_absolute():
        source_dir = config_path.parent / source_dir

    brand_dir = source_dir / "brands" / brand_id
    if brand_dir.exists():
        raise ScaffoldError(f"Brand '{brand_id}' already exists at {brand_dir}")

    title = title_case(brand_id)
    result = ScaffoldResult(brand_id=brand_id, title=title)

    for name in ASSET_DIRECTORIES:
        directory = brand_dir / name
        directory.mkdir(parents=True, exist_ok=True)
        result.created.append(directory)

    readme = brand_dir / "README.md"
    readme.write_text(README_TEMPLATE.format(title=title, brand_id=brand_id), encoding="utf-8")
    result.created.append(readme)

    meta = brand_dir / "meta.json"
    meta.write_text(json.dumps(starter_metadata(title), indent=2) + "\n", encoding="utf-8")
    result.created.append(meta)

    brands = data.setdefault("brands", {})
    if brand_id in brands:
        logger.warning("Brand '%s' already exists in config", brand_id)
    else:
        brands[brand_id] = json.loads(json.dumps(DEFAULT_BRAND_CONFIG))
        config_path.write_text(json.dumps(data, indent=4) + "\n", encoding="utf-8")
        result.config_updated = True

    return result
