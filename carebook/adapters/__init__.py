"""
Adapters layer - Provider data sources.
"""

from .yaml_store import YamlProviderStore

__all__ = ["YamlProviderStore"]
