"""Sources for the manifest pipeline.

This package contains the base interface for generated-asset sources.
Storage-specific implementations live in the platforms/ directory.
"""

from .base import Source

__all__ = ["Source"]
