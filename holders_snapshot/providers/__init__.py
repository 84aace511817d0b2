"""Data providers for the holders snapshot tool."""

from .base import BaseProvider, PageFetcher
from .sui_graphql import SuiGraphQLProvider, coin_object_type

__all__ = [
    "BaseProvider",
    "PageFetcher",
    "SuiGraphQLProvider",
    "coin_object_type",
]
