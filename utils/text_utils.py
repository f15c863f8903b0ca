"""
Text utilities for handling Spanish text with accents.

Used for header comparison and slug generation during property imports.
"""

import re
import unicodedata
from typing import Optional


def strip_accents(text: Optional[str]) -> str:
    """
    Remove diacritics, keeping the base characters.

    - "Área construida" → "Area construida"
    - "Baños" → "Banos"
    - None → ""

    Args:
        text: Original text (may have accents)

    Returns:
        Text without combining marks
    """
    if not text:
        return ""

    # NFD decomposition separates base chars from accents
    normalized = unicodedata.normalize('NFD', text)

    # Remove accent marks (combining characters in Unicode category 'Mn')
    return ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )


def generate_slug(text: Optional[str]) -> str:
    """
    Generate a URL-friendly slug from a property title.

    - "Apto en Chapinero" → "apto-en-chapinero"
    - "Casa Campestre / Año 2020" → "casa-campestre-ano-2020"

    Args:
        text: Title text

    Returns:
        Lowercase ASCII slug (may be empty if text has no usable characters)
    """
    slug = strip_accents(text).lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")
