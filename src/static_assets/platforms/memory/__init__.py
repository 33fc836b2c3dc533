"""In-memory platform for the manifest pipeline."""

from collections.abc import Mapping, Sequence

from .source import MemorySource

# Auto-register with the registry
from ...registry import SourceRegistry


def _create_memory_source(
    tree: Mapping[str, Mapping[str, Sequence[str]]],
    metadata: Mapping[str, str] | None = None,
    **kwargs,
) -> MemorySource:
    """Factory function for creating in-memory sources."""
    return MemorySource(tree, metadata)


SourceRegistry.register_factory('memory', _create_memory_source)

__all__ = ["MemorySource"]
