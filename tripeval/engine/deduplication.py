"""
Entity Deduplicator.

Merges named entities (hotels, tours, restaurants, DMCs) that respondents
entered under arbitrary slots across several rows.
"""

import logging
from typing import Dict, List, Sequence

from tripeval.models.evaluation import NamedRating
from tripeval.models.raw_item import RawItem
from tripeval.registry.column_registry import COLUMN_REGISTRY, ColumnRegistry, EntityKind
from tripeval.utils.accessors import get_number, get_text

logger = logging.getLogger(__name__)


class EntityDeduplicator:
    """
    Collects the distinct entity names of a kind across items and averages
    their ratings.

    Names are matched by exact equality. A name entered in two slots of the
    same item contributes both ratings.
    """

    def __init__(self, registry: ColumnRegistry = COLUMN_REGISTRY):
        self.registry = registry

    def distinct_names(self, items: Sequence[RawItem], kind: EntityKind) -> List[str]:
        """
        Distinct non-empty names observed in any slot of any item.

        Returns:
            Names in order of first appearance
        """
        names: Dict[str, None] = {}
        for item in items:
            for name_field, _ in kind.slots:
                name = get_text(item.column_values, name_field, self.registry)
                if name.strip():
                    names.setdefault(name, None)
        return list(names)

    def collect_ratings(
        self,
        items: Sequence[RawItem],
        kind: EntityKind
    ) -> Dict[str, List[float]]:
        """
        Every rating attributed to each distinct name.

        Args:
            items: Rows to scan
            kind: Entity kind whose slots are scanned

        Returns:
            name -> ratings (possibly empty), names in first-appearance order
        """
        ratings: Dict[str, List[float]] = {
            name: [] for name in self.distinct_names(items, kind)
        }

        for item in items:
            for name_field, rating_field in kind.slots:
                name = get_text(item.column_values, name_field, self.registry)
                if name not in ratings:
                    continue
                rating = get_number(item.column_values, rating_field, self.registry)
                if rating is not None:
                    ratings[name].append(rating)

        return ratings

    def deduplicate(self, items: Sequence[RawItem], kind: EntityKind) -> List[NamedRating]:
        """
        One NamedRating per distinct name with the mean of its ratings.
        Names nobody rated keep a None rating.
        """
        collected = self.collect_ratings(items, kind)
        entities = [
            NamedRating(name=name, rating=mean(ratings))
            for name, ratings in collected.items()
        ]

        logger.debug(
            f"Deduplicated {len(entities)} {kind.kind} entities across {len(items)} items"
        )
        return entities


def mean(values: Sequence[float]):
    """Arithmetic mean, or None for an empty sequence."""
    if not values:
        return None
    return sum(values) / len(values)
