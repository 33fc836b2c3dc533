"""Source registry for factory-based pipeline creation.

This module provides a central registry for source factories,
enabling storage-agnostic pipeline creation and automatic
platform discovery.
"""

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .pipeline import ManifestPipeline
    from .sources.base import Source

logger = logging.getLogger(__name__)

# Keyword arguments consumed by ManifestPipeline rather than the source factory
PIPELINE_OPTIONS = ("version", "base_urls", "size_policy", "policy_resolver", "clock", "report")


class SourceRegistry:
    """Central registry for source factories.

    Platforms register themselves when imported, and the registry
    can automatically discover all available platforms.
    """

    _factories: dict[str, Callable[..., "Source"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "Source"]) -> None:
        """Register a factory function for creating sources.

        Args:
            name: Name of the source (e.g., 'filesystem', 'memory')
            factory: Callable that creates a Source instance
        """
        cls._factories[name] = factory

    @classmethod
    def create_source(cls, source_name: str, **kwargs) -> "Source":
        """Create a source from a registered factory.

        Raises:
            ValueError: If source_name is not registered
        """
        if source_name not in cls._factories:
            available = ', '.join(cls._factories.keys()) or 'none'
            raise ValueError(
                f"Unknown source: '{source_name}'. Available sources: {available}"
            )
        return cls._factories[source_name](**kwargs)

    @classmethod
    def create_pipeline(cls, source_name: str, **kwargs) -> "ManifestPipeline":
        """Create a manifest pipeline from a registered source.

        Args:
            source_name: Name of the registered source
            **kwargs: Arguments passed to the source factory. Pipeline options
                     (version, base_urls, size_policy, policy_resolver, clock,
                     report) are extracted and passed to the pipeline.

        Returns:
            ManifestPipeline reading from the requested source

        Raises:
            ValueError: If source_name is not registered

        Example:
            >>> pipeline = SourceRegistry.create_pipeline(
            ...     'filesystem',
            ...     output_dir=Path('site/v1'),
            ...     version='v1',
            ... )
        """
        # Import here to avoid circular dependency
        from .pipeline import ManifestPipeline

        options = {key: kwargs.pop(key) for key in PIPELINE_OPTIONS if key in kwargs}
        source = cls.create_source(source_name, **kwargs)

        return ManifestPipeline(source, **options)

    @classmethod
    def list_sources(cls) -> list[str]:
        """List all registered source names."""
        return list(cls._factories.keys())

    @classmethod
    def discover_platforms(cls) -> None:
        """Auto-discover and import all platforms.

        This method iterates through the platforms/ directory and
        attempts to import each platform module. Platforms with
        missing dependencies are skipped.
        """
        platforms_dir = Path(__file__).parent / 'platforms'

        if not platforms_dir.exists():
            return

        for platform_path in sorted(platforms_dir.iterdir()):
            if not platform_path.is_dir():
                continue

            if not (platform_path / '__init__.py').exists():
                continue

            platform_name = platform_path.name

            try:
                # This triggers auto-registration via the platform's __init__.py
                importlib.import_module(
                    f'.platforms.{platform_name}',
                    package='static_assets'
                )
            except ImportError as e:
                logger.debug("Platform '%s' unavailable: %s", platform_name, e)
