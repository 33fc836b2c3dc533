"""Command-line interface for the asset pipeline.

Subcommands:
    build      Generate variants, then write the manifest
    manifest   Write the manifest from already generated output
    validate   Check source assets before building
    new-brand  Scaffold a new brand
    search     Query a manifest

Progress and warnings go to stderr; stdout carries machine output only.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from jsonschema import ValidationError

from .catalog import CatalogIndex, CatalogQuery, asset_url, load_manifest, resolve_variant, run_query
from .config import DEFAULT_CONFIG_NAME, GenerationConfig, load_config
from .core.report import PipelineError, RunReport
from .core.types import ASSET_FORMATS, ASSET_TYPES, Manifest
from .generation import Generator
from .pipeline import write_manifest
from .registry import SourceRegistry
from .scaffold import create_brand
from .validation import validate_sources

logger = logging.getLogger(__name__)


def build_manifest_for_config(config: GenerationConfig, report: RunReport) -> Manifest:
    """Assemble the manifest for the generated output a config describes.

    Raises:
        ValueError: If the output directory does not exist
        ConfigError: If a base URL is invalid
    """
    pipeline = SourceRegistry.create_pipeline(
        'filesystem',
        output_dir=config.output_dir,
        metadata_dir=config.source_brands_dir,
        version=config.version,
        base_urls=config.base_urls,
        policy_resolver=config.size_policy,
        report=report,
    )
    return pipeline.build_manifest()


def print_report(report: RunReport) -> None:
    if not report.warnings:
        return
    print(f"\n{len(report)} warning(s):", file=sys.stderr)
    for warning in report.warnings:
        print(f"  - {warning}", file=sys.stderr)


def write_manifest_for_config(config: GenerationConfig, report: RunReport, output: Path | None = None) -> Path:
    print(f"Scanning directory: {config.output_dir}", file=sys.stderr)
    manifest = build_manifest_for_config(config, report)

    asset_count = sum(len(group["assets"]) for brand in manifest["brands"] for group in brand["assetTypes"])
    print(f"Found {len(manifest['brands'])} brands, {asset_count} assets", file=sys.stderr)

    path = write_manifest(manifest, output or config.manifest_path)
    print(f"Manifest written: {path}", file=sys.stderr)
    return path


def cmd_build(args: argparse.Namespace) -> int:
    report = RunReport()
    config = load_config(Path(args.config))

    if not args.skip_generate:
        brand_ids = [args.brand] if args.brand else None
        result = Generator(config, report).run(brand_ids)
        print(f"Generated {len(result.written)} files", file=sys.stderr)

    write_manifest_for_config(config, report)
    print_report(report)
    return 0


def cmd_manifest(args: argparse.Namespace) -> int:
    report = RunReport()
    config = load_config(Path(args.config))
    write_manifest_for_config(config, report, Path(args.output) if args.output else None)
    print_report(report)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    config = load_config(Path(args.config))
    print("Validating source assets...", file=sys.stderr)
    result = validate_sources(config)

    for issue in result.errors:
        print(f"  ERROR {issue.message}" + (f" ({issue.path})" if issue.path else ""), file=sys.stderr)
    for issue in result.warnings:
        print(f"  WARN  {issue.message}" + (f" ({issue.path})" if issue.path else ""), file=sys.stderr)

    if not result.ok:
        print(f"Validation failed with {len(result.errors)} error(s)", file=sys.stderr)
        return 1

    print(f"Validation successful! ({len(result.warnings)} warning(s))", file=sys.stderr)
    return 0


def cmd_new_brand(args: argparse.Namespace) -> int:
    result = create_brand(Path(args.config), args.name)
    print(f"Created brand '{result.title}' ({result.brand_id})", file=sys.stderr)
    for path in result.created:
        print(f"  {path}", file=sys.stderr)
    if result.config_updated:
        print(f"Added '{result.brand_id}' to {args.config}", file=sys.stderr)
    return 0


def search_results(manifest: Manifest, args: argparse.Namespace) -> list[dict]:
    """Run a search and describe each hit with its preferred file URL."""
    index = CatalogIndex.from_manifest(manifest)
    query = CatalogQuery.build(
        text=args.text or "",
        brand_ids=args.brand or (),
        types=args.type or (),
        formats=args.format or (),
        min_size=args.min_size,
        max_size=args.max_size,
    )

    results = []
    for record in run_query(index, query):
        file = resolve_variant(record.asset)
        results.append({
            "brand": record.brand_id,
            "type": record.asset_type,
            "id": record.asset_id,
            "displayName": record.display_name,
            "formats": record.formats,
            "sizes": record.sizes,
            "url": asset_url(manifest, file, args.cdn) if file else None,
        })
    return results


def cmd_search(args: argparse.Namespace) -> int:
    try:
        manifest = load_manifest(Path(args.manifest))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: Cannot read manifest: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Error: Manifest validation failed: {e.message}", file=sys.stderr)
        return 1

    if args.cdn not in manifest["baseUrls"]:
        available = ", ".join(manifest["baseUrls"]) or "none"
        print(f"Error: Unknown CDN '{args.cdn}'. Available: {available}", file=sys.stderr)
        return 1

    results = search_results(manifest, args)
    print(f"{len(results)} result(s)", file=sys.stderr)

    if args.json:
        json.dump(results, sys.stdout, indent=2, ensure_ascii=False)
        print()
        return 0

    for item in results:
        print(f"{item['brand']}/{item['type']}/{item['id']}\t{item['displayName']}\t{item['url'] or '-'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="static-assets",
        description="Build, validate and search brand asset manifests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate all variants and the manifest
  static-assets build

  # Regenerate one brand
  static-assets build --brand acme

  # Rebuild only the manifest, printing progress details
  static-assets -v manifest --output site/assets-manifest.json

  # Search with a typo, restricted to logos
  static-assets search site/assets-manifest.json aome --type logos
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_config(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--config", default=DEFAULT_CONFIG_NAME, help=f"Configuration file (default: {DEFAULT_CONFIG_NAME})"
        )

    build = subparsers.add_parser("build", help="Generate variants and write the manifest")
    add_config(build)
    build.add_argument("--brand", help="Only generate variants for this brand")
    build.add_argument("--skip-generate", action="store_true", help="Skip variant generation")
    build.set_defaults(func=cmd_build)

    manifest = subparsers.add_parser("manifest", help="Write the manifest from generated output")
    add_config(manifest)
    manifest.add_argument("--output", help="Manifest path (default: from configuration)")
    manifest.set_defaults(func=cmd_manifest)

    validate = subparsers.add_parser("validate", help="Validate source assets")
    add_config(validate)
    validate.set_defaults(func=cmd_validate)

    new_brand = subparsers.add_parser("new-brand", help="Scaffold a new brand")
    add_config(new_brand)
    new_brand.add_argument("name", help='Brand name (e.g. "Acme Corp")')
    new_brand.set_defaults(func=cmd_new_brand)

    search = subparsers.add_parser("search", help="Search a manifest")
    search.add_argument("manifest", help="Path to assets-manifest.json")
    search.add_argument("text", nargs="?", default="", help="Fuzzy search text")
    search.add_argument("--brand", action="append", help="Restrict to a brand id (repeatable)")
    search.add_argument("--type", action="append", choices=ASSET_TYPES, help="Restrict to an asset type")
    search.add_argument("--format", action="append", choices=ASSET_FORMATS, help="Restrict to a format")
    search.add_argument("--min-size", type=int, help="Minimum pixel width")
    search.add_argument("--max-size", type=int, help="Maximum pixel width")
    search.add_argument("--cdn", default="jsdelivr", help="CDN used for URLs (default: jsdelivr)")
    search.add_argument("--json", action="store_true", help="Print results as JSON")
    search.set_defaults(func=cmd_search)

    return parser


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; debug output only with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[static-assets] %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the static-assets command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        status = args.func(args)
    except (PipelineError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(status)


if __name__ == "__main__":
    main()
