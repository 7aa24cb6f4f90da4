"""
In-process product filtering shared by both repository backends.
"""

from typing import Iterable, List, Optional

from marketplace.domain.models import Category, Product


def normalize_query(query: Optional[str]) -> Optional[str]:
    """Lowercase a search query. The query is matched as given, surrounding whitespace included."""
    if query is None:
        return None
    return query.lower()


def matches(product: Product, query: Optional[str], category: Optional[Category]) -> bool:
    """
    Check a product against already-normalized search filters.

    Args:
        product: Product to test
        query: Lowercased query from normalize_query(), or None
        category: Required category, or None for any
    """
    if category is not None and product.category != category:
        return False
    if query is None:
        return True
    if query in product.name.lower():
        return True
    return product.description is not None and query in product.description.lower()


def filter_products(
    products: Iterable[Product], query: Optional[str], category: Optional[Category]
) -> List[Product]:
    lowered = normalize_query(query)
    return [product for product in products if matches(product, lowered, category)]


def newest_first_page(products: List[Product], limit: int, offset: int) -> List[Product]:
    """
    Sort newest first and slice ``[offset, offset + limit)``.

    Negative offsets count as 0; a non-positive limit yields an empty page.
    """
    if limit <= 0:
        return []
    offset = max(offset, 0)
    ordered = sorted(products, key=lambda product: product.created_at, reverse=True)
    return ordered[offset : offset + limit]
