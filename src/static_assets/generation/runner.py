"""Variant generation from source images.

For every configured brand and asset type, SVG sources are minified and
rasterised, and raster sources are resized and re-encoded into every
configured size and format:

    {sourceDir}/brands/{brand}/{type}/logo.svg
        -> {outputDir}/brands/{brand}/{type}/logo.svg        (minified)
        -> {outputDir}/brands/{brand}/{type}/logo-32.png
        -> {outputDir}/brands/{brand}/{type}/logo-32@2x.webp  (retina)

Conversions run in fixed-size batches on a thread pool; each batch finishes
before the next starts. A failed conversion is reported and skipped.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from xml.etree.ElementTree import ParseError

from ..config import GenerationConfig, SizeSpec
from ..core.report import OutputError, RunReport, WarningCategory
from .images import (
    RASTER_SOURCE_EXTENSIONS,
    encode_image,
    open_image,
    rasterize_svg,
    resize_image,
    source_dimensions,
)
from .svg import minify_svg

logger = logging.getLogger(__name__)

# "original" output format for sources that cannot be re-encoded as themselves
ORIGINAL_FORMATS = {"jpeg": "jpg", "gif": "png"}


@dataclass(frozen=True)
class ConversionTask:
    """One output file to produce from one source file."""

    source: Path
    output: Path
    format: str
    quality: int
    width: int | None = None
    height: int | None = None

    @property
    def is_svg_source(self) -> bool:
        return self.source.suffix.lower() == ".svg"

    def run(self) -> Path:
        """Render, encode and write the output file."""
        if self.is_svg_source:
            image = rasterize_svg(self.source.read_bytes(), self.width)
        else:
            image = open_image(self.source)

        if self.width is not None:
            image = resize_image(image, self.width, self.height)

        data = encode_image(image, self.format, self.quality)
        self.output.parent.mkdir(parents=True, exist_ok=True)
        self.output.write_bytes(data)
        return self.output


@dataclass
class GenerationResult:
    written: list[Path] = field(default_factory=list)
    report: RunReport = field(default_factory=RunReport)


def run_in_batches(
    tasks: Sequence[ConversionTask],
    concurrency: int,
    report: RunReport,
    on_written: Callable[[Path], None] | None = None,
) -> list[Path]:
    """Run tasks in batches of ``concurrency``, waiting for each batch.

    Args:
        tasks: Conversions to run
        concurrency: Maximum number of simultaneous conversions
        report: Receives a conversion warning for each failed task
        on_written: Optional callback for each successfully written file

    Returns:
        Paths of the files written, in task order
    """
    written: list[Path] = []
    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        for start in range(0, len(tasks), concurrency):
            batch = tasks[start:start + concurrency]
            futures = [(task, executor.submit(task.run)) for task in batch]
            for task, future in futures:
                try:
                    path = future.result()
                except Exception as e:
                    report.warn(
                        WarningCategory.CONVERSION,
                        f"Failed to generate {task.output.name}: {e}",
                        task.source,
                    )
                    continue
                written.append(path)
                if on_written is not None:
                    on_written(path)
    return written


def variant_filename(base: str, spec: SizeSpec | None, multiplier: int, fmt: str) -> str:
    """Output filename for one size/density/format combination."""
    suffix = spec.suffix if spec is not None else ""
    retina = f"@{multiplier}x" if multiplier > 1 else ""
    return f"{base}{suffix}{retina}.{fmt}"


class Generator:
    """Generates all configured variants for the configured brands.

    Example:
        >>> config = load_config(Path('assets.config.json'))
        >>> result = Generator(config).run(brand_ids=['acme'])
        >>> len(result.written)
        12
    """

    def __init__(self, config: GenerationConfig, report: RunReport | None = None):
        self.config = config
        self.report = report if report is not None else RunReport()

    def run(self, brand_ids: Iterable[str] | None = None) -> GenerationResult:
        """Generate variants for all (or the selected) configured brands.

        Raises:
            OutputError: If the output directory cannot be created
        """
        try:
            self.config.output_brands_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(f"Cannot create output directory {self.config.output_brands_dir}: {e}") from e

        selected = list(self.config.brands)
        if brand_ids is not None:
            wanted = list(brand_ids)
            for missing in sorted(set(wanted) - set(selected)):
                self.report.warn(WarningCategory.CONFIG, f"Brand '{missing}' is not configured")
            selected = [b for b in selected if b in wanted]

        result = GenerationResult(report=self.report)
        for brand_id in selected:
            logger.info("Processing brand: %s", brand_id)
            for asset_type in self.config.brands[brand_id]:
                result.written.extend(self.process_asset_type(brand_id, asset_type))
        return result

    def process_asset_type(self, brand_id: str, asset_type: str) -> list[Path]:
        source_dir = self.config.source_brands_dir / brand_id / asset_type
        output_dir = self.config.output_brands_dir / brand_id / asset_type

        if not source_dir.is_dir():
            self.report.warn(WarningCategory.SOURCE, f"No source directory: {asset_type}/", source_dir)
            return []

        sources = sorted(p for p in source_dir.iterdir() if p.is_file() and not p.name.startswith("."))
        written: list[Path] = []
        tasks: list[ConversionTask] = []

        for source in sources:
            ext = source.suffix.lower()
            if ext == ".svg":
                svg_output = self.process_svg(source, output_dir / source.name)
                if svg_output is None:
                    continue
                written.append(svg_output)
            elif ext not in RASTER_SOURCE_EXTENSIONS:
                continue
            tasks.extend(self.plan_variants(source, output_dir, brand_id, asset_type))

        written.extend(run_in_batches(tasks, self.config.concurrency, self.report))
        return written

    def process_svg(self, source: Path, output: Path) -> Path | None:
        """Write a minified copy of an SVG source."""
        try:
            content = source.read_text(encoding="utf-8")
            minified = minify_svg(content, self.config.svg)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(minified, encoding="utf-8")
        except (OSError, UnicodeDecodeError, ParseError) as e:
            self.report.warn(WarningCategory.CONVERSION, f"Failed to optimize SVG: {e}", source)
            return None

        saved = 1 - len(minified.encode("utf-8")) / max(1, len(content.encode("utf-8")))
        logger.info("%s (%.1f%% smaller)", output.name, saved * 100)
        return output

    def plan_variants(
        self, source: Path, output_dir: Path, brand_id: str, asset_type: str
    ) -> list[ConversionTask]:
        """Build the conversion tasks for one source file."""
        is_svg = source.suffix.lower() == ".svg"
        input_ext = source.suffix.lower().lstrip(".")
        type_config = self.config.asset_type_config(brand_id, asset_type)
        quality = self.config.defaults.quality

        source_width: int | None = None
        if not is_svg:
            try:
                source_width = source_dimensions(source)[0]
            except OSError as e:
                self.report.warn(WarningCategory.CONVERSION, f"Cannot read image: {e}", source)
                return []

        formats = []
        for fmt in self.config.formats_for(brand_id, asset_type):
            if fmt == "original":
                if is_svg:
                    # The minified SVG is the original
                    continue
                fmt = ORIGINAL_FORMATS.get(input_ext, input_ext)
            if fmt == "svg":
                continue
            if fmt not in formats:
                formats.append(fmt)

        tasks = []
        sizes: list[SizeSpec | None] = list(self.config.sizes_for(brand_id, asset_type)) or [None]
        for spec in sizes:
            if spec is not None and source_width is not None and spec.width > source_width:
                self.report.warn(
                    WarningCategory.SOURCE,
                    f"Skipping {source.stem}{spec.suffix} (source too small)",
                    source,
                )
                continue

            multipliers = [1]
            if type_config.generate_retina and spec is not None:
                if source_width is None or spec.width * 2 <= source_width:
                    multipliers.append(2)

            for multiplier in multipliers:
                width = spec.width * multiplier if spec is not None else source_width
                height = spec.height * multiplier if spec is not None and spec.height else None
                for fmt in formats:
                    tasks.append(
                        ConversionTask(
                            source=source,
                            output=output_dir / variant_filename(source.stem, spec, multiplier, fmt),
                            format=fmt,
                            quality=quality.for_format(fmt),
                            width=width,
                            height=height,
                        )
                    )
        return tasks
