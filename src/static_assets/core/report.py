"""Warning accumulation and fatal error types for pipeline runs.

Non-fatal problems (bad metadata, missing source directories, failed
conversions, filename conflicts) are recorded on a RunReport and reported in
full at the end of a run. Fatal problems raise a PipelineError.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class PipelineError(RuntimeError):
    """Fatal error that aborts the whole run."""


class ConfigError(PipelineError):
    """Raised when the root configuration cannot be read or parsed."""


class OutputError(PipelineError):
    """Raised when the output directory or manifest cannot be written."""


class WarningCategory(str, Enum):
    """Categories of non-fatal problems."""

    CONFIG = "config"
    SOURCE = "source"
    CONVERSION = "conversion"
    INTEGRITY = "integrity"


@dataclass(frozen=True)
class PipelineWarning:
    """A single non-fatal problem found during a run."""

    category: WarningCategory
    message: str
    path: str | None = None

    def __str__(self) -> str:
        text = f"[{self.category.value}] {self.message}"
        if self.path:
            text += f" ({self.path})"
        return text


@dataclass
class RunReport:
    """Collects warnings raised while generating assets or a manifest."""

    warnings: list[PipelineWarning] = field(default_factory=list)

    def warn(self, category: WarningCategory, message: str, path: object | None = None) -> None:
        """Record a warning and log it."""
        warning = PipelineWarning(category, message, str(path) if path is not None else None)
        self.warnings.append(warning)
        logger.warning("%s", warning)

    def by_category(self, category: WarningCategory) -> list[PipelineWarning]:
        return [w for w in self.warnings if w.category is category]

    def merge(self, other: "RunReport") -> None:
        self.warnings.extend(other.warnings)

    @property
    def ok(self) -> bool:
        return not self.warnings

    def __len__(self) -> int:
        return len(self.warnings)
