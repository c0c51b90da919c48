"""Catalog vertical configuration.

Re-exports the CatalogConfig from the patterns module,
demonstrating how verticals use the domain config pattern.
"""

from patterns.domain_config import AppConfig, CatalogConfig, DatabaseConfig, LoggingConfig

__all__ = ["AppConfig", "CatalogConfig", "DatabaseConfig", "LoggingConfig", "load_config"]


def load_config() -> CatalogConfig:
    """Read the process environment into a CatalogConfig."""
    return CatalogConfig.from_env()
