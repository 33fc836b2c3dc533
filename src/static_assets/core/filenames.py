"""Filename grammar for generated asset files.

Generated files are named ``{assetId}[-{size}].{format}``:

    logo.svg              -> ("logo", None, "svg")
    logo-128.png          -> ("logo", 128, "png")
    logo-on-brand-64.webp -> ("logo-on-brand", 64, "webp")

An asset id that itself ends in digits (``icon-2024.png``) cannot be told
apart from a sized variant by the grammar alone. SizeSuffixPolicy makes the
rule explicit: by default every trailing digit run is a size, and a policy
built with ``known_sizes`` only accepts digit runs that are configured sizes.
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from .types import ASSET_FORMATS

# Extensions accepted as aliases of a canonical format
FORMAT_ALIASES = {"jpeg": "jpg"}

SIZE_SUFFIX_PATTERN = re.compile(r"^(.+?)-(\d+)$")


class FilenameError(ValueError):
    """Raised when a filename does not follow the asset filename grammar."""


class UnsupportedFormatError(FilenameError):
    """Raised when a filename's extension is not a known asset format."""


@dataclass(frozen=True)
class SizeSuffixPolicy:
    """Decides whether a trailing ``-<digits>`` run is a pixel size.

    Attributes:
        known_sizes: When set, only these sizes are accepted as suffixes;
            any other digit run is kept as part of the asset id.
    """

    known_sizes: frozenset[int] | None = None

    @classmethod
    def strict(cls, sizes: "set[int] | frozenset[int] | list[int]") -> "SizeSuffixPolicy":
        return cls(known_sizes=frozenset(sizes))

    def accepts(self, size: int) -> bool:
        return self.known_sizes is None or size in self.known_sizes


DEFAULT_POLICY = SizeSuffixPolicy()


@dataclass(frozen=True)
class ParsedFilename:
    """Result of parsing a generated filename."""

    asset_id: str
    size: int | None
    format: str

    def filename(self) -> str:
        """Rebuild the canonical filename for this parse result."""
        suffix = f"-{self.size}" if self.size is not None else ""
        return f"{self.asset_id}{suffix}.{self.format}"


def normalize_format(extension: str) -> str:
    """Return the canonical format for a file extension.

    Args:
        extension: Extension with or without the leading dot

    Returns:
        Lower-cased canonical format token

    Raises:
        UnsupportedFormatError: If the extension is not a known asset format
    """
    ext = extension.lstrip(".").lower()
    ext = FORMAT_ALIASES.get(ext, ext)
    if ext not in ASSET_FORMATS:
        raise UnsupportedFormatError(f"Unsupported format: '{extension}'")
    return ext


def parse_filename(filename: str, policy: SizeSuffixPolicy = DEFAULT_POLICY) -> ParsedFilename:
    """Parse a bare generated filename into (asset id, size, format).

    Args:
        filename: Bare filename with extension
        policy: Rule for treating trailing digit runs as sizes

    Returns:
        ParsedFilename for the file

    Raises:
        UnsupportedFormatError: If the extension is not a known format
        FilenameError: If the filename has no stem or no extension
    """
    path = PurePosixPath(filename)
    if path.name != filename or not filename:
        raise FilenameError(f"Expected a bare filename, got '{filename}'")

    stem, suffix = path.stem, path.suffix
    if not suffix or not stem or stem.startswith("."):
        raise FilenameError(f"Missing name or extension: '{filename}'")

    file_format = normalize_format(suffix)

    match = SIZE_SUFFIX_PATTERN.match(stem)
    if match:
        size = int(match.group(2))
        if policy.accepts(size):
            return ParsedFilename(asset_id=match.group(1), size=size, format=file_format)

    return ParsedFilename(asset_id=stem, size=None, format=file_format)
