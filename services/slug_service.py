"""
Slug generation for imported properties.

The import pipeline only needs a callable title -> slug. The default
generator is deterministic so the same file always previews the same way;
the persistence layer can pass its own generator (or seed this one with
the tenant's existing slugs) to guarantee uniqueness across the catalog.
"""

from typing import Callable, Iterable, Optional

from utils.text_utils import generate_slug

SlugGenerator = Callable[[str], str]

# Used when a title has no characters usable in a URL
FALLBACK_SLUG = "propiedad"


class UniqueSlugGenerator:
    """
    Slugs unique within one generator instance.

    "Apto en Chapinero" -> "apto-en-chapinero", then "apto-en-chapinero-2", ...
    """

    def __init__(self, existing_slugs: Optional[Iterable[str]] = None):
        self._taken: set[str] = set(existing_slugs or ())

    def __call__(self, title: str) -> str:
        base = generate_slug(title) or FALLBACK_SLUG
        slug = base
        suffix = 2
        while slug in self._taken:
            slug = f"{base}-{suffix}"
            suffix += 1
        self._taken.add(slug)
        return slug
