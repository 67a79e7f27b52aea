"""TMDB transport for the catalog facade."""

from .images import build_image_url
from .protocols import CatalogPage, CatalogRecord, GenreList, RemoteCatalogClient
from .tmdb_client import TMDBCatalogClient

__all__ = [
    "CatalogPage",
    "CatalogRecord",
    "GenreList",
    "RemoteCatalogClient",
    "TMDBCatalogClient",
    "build_image_url",
]
