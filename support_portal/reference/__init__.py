"""Static reference registries (KB articles, catalog items, affiliate links)."""

from .catalog import CatalogField, CatalogFieldType, CatalogItem, get_catalog_item_by_slug, get_catalog_items
from .kb import KBArticle, get_kb_article_by_slug, get_kb_articles

__all__ = [
    "CatalogField",
    "CatalogFieldType",
    "CatalogItem",
    "KBArticle",
    "get_catalog_item_by_slug",
    "get_catalog_items",
    "get_kb_article_by_slug",
    "get_kb_articles",
]
