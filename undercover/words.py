"""Word catalogs and random pair selection."""

import logging
import random
from typing import Iterable, Optional

from undercover.errors import CatalogError
from undercover.state import WordPair

logger = logging.getLogger(__name__)


def _pairs(*raw: tuple[str, str]) -> tuple[WordPair, ...]:
    return tuple(WordPair(civil=c, undercover=u) for c, u in raw)


# Order is part of the persisted state: used indices point into these tuples.
CATALOGS: dict[str, tuple[WordPair, ...]] = {
    "en": _pairs(
        ("Butter", "Margarine"),
        ("Coffee", "Tea"),
        ("Cat", "Dog"),
        ("Beach", "Pool"),
        ("Guitar", "Violin"),
        ("Pizza", "Quiche"),
        ("Train", "Tram"),
        ("Moon", "Sun"),
        ("Pen", "Pencil"),
        ("Castle", "Palace"),
        ("Honey", "Jam"),
        ("Rain", "Snow"),
        ("Wolf", "Fox"),
        ("Doctor", "Nurse"),
        ("Cinema", "Theatre"),
        ("Lemon", "Lime"),
        ("Sofa", "Armchair"),
        ("Ski", "Snowboard"),
        ("Pirate", "Viking"),
        ("Croissant", "Brioche"),
        ("Shark", "Dolphin"),
        ("Candle", "Lamp"),
        ("Mountain", "Hill"),
        ("Cookie", "Biscuit"),
    ),
    "fr": _pairs(
        ("Beurre", "Margarine"),
        ("Café", "Thé"),
        ("Chat", "Chien"),
        ("Plage", "Piscine"),
        ("Guitare", "Violon"),
        ("Pizza", "Quiche"),
        ("Train", "Tramway"),
        ("Lune", "Soleil"),
        ("Stylo", "Crayon"),
        ("Château", "Palais"),
        ("Miel", "Confiture"),
        ("Pluie", "Neige"),
        ("Loup", "Renard"),
        ("Médecin", "Infirmier"),
        ("Cinéma", "Théâtre"),
        ("Citron", "Citron vert"),
        ("Canapé", "Fauteuil"),
        ("Ski", "Snowboard"),
        ("Pirate", "Viking"),
        ("Croissant", "Brioche"),
        ("Requin", "Dauphin"),
        ("Bougie", "Lampe"),
        ("Montagne", "Colline"),
        ("Petit Beurre", "Sablé"),
    ),
}


def fetch_catalog(language: str) -> tuple[WordPair, ...]:
    """Return the word-pair catalog for a language. Raises CatalogError if unknown or empty."""
    catalog = CATALOGS.get(language)
    if catalog is None:
        raise CatalogError(f"No word catalog for language {language!r}")
    if not catalog:
        raise CatalogError(f"Word catalog for language {language!r} is empty")
    return catalog


def _unused_indices(catalog_size: int, used_indices: Iterable[int]) -> list[int]:
    used = set(used_indices)
    return [i for i in range(catalog_size) if i not in used]


def pick_pair(
    language: str,
    used_indices: list[int],
    rng: Optional[random.Random] = None,
) -> tuple[WordPair, list[int]]:
    """
    Draw a random pair not listed in used_indices.

    When every pair has been used the whole catalog becomes eligible again
    and the returned index list restarts with only the new draw.
    Returns (pair, new_used_indices); used_indices is not mutated.
    """
    rng = rng or random.Random()
    catalog = fetch_catalog(language)
    available = _unused_indices(len(catalog), used_indices)
    if available:
        new_used = list(used_indices)
    else:
        logger.debug("Word catalog %s exhausted; recycling %d pairs", language, len(catalog))
        available = list(range(len(catalog)))
        new_used = []
    index = available[rng.randrange(len(available))]
    new_used.append(index)
    logger.debug("Drew word pair %d from %s catalog", index, language)
    return catalog[index], new_used


def remaining_pairs(language: str, used_indices: list[int]) -> int:
    """Number of pairs that can still be drawn before the catalog recycles."""
    return len(_unused_indices(len(fetch_catalog(language)), used_indices))
