"""Source implementations for the manifest pipeline.

This package contains self-contained platform modules that provide
Source implementations for different storage backends (filesystem,
in-memory trees).

Each platform module auto-registers itself with the SourceRegistry
when imported.
"""

# Platform modules are imported dynamically by SourceRegistry.discover_platforms()
# to handle missing dependencies gracefully
