"""
Distribution Calculator.

Rating histograms for two call sites:
- Trip view: every category gets all ten buckets, zero counts included
- Supplier search: zero-count buckets are omitted

Callers must not assume uniform bucket presence across the two.
"""

import logging
from collections import Counter
from typing import Dict, List, Sequence

import config.settings as settings
from tripeval.engine.deduplication import EntityDeduplicator, mean
from tripeval.models.distribution import (
    CategoryDistribution,
    CountryGroup,
    RatingCount,
    RatingDistribution,
    SupplierSearchResult,
    SupplierSummary,
)
from tripeval.models.raw_item import RawItem
from tripeval.models.survey import SupplierType, SurveyType
from tripeval.registry.column_registry import (
    COLUMN_REGISTRY,
    DISTRIBUTION_KINDS,
    DMCS,
    HOTELS,
    RATING_FIELDS,
    RESTAURANTS,
    TOURS,
    ColumnRegistry,
)
from tripeval.utils.accessors import get_number, get_text
from tripeval.utils.location import infer_country, primary_place

logger = logging.getLogger(__name__)


SUPPLIER_KINDS = {
    SupplierType.RESTAURANTS: RESTAURANTS,
    SupplierType.HOTELS: HOTELS,
    SupplierType.DMC: DMCS,
    SupplierType.TOURS: TOURS,
}


def build_rating_counts(ratings: Sequence[float], include_empty: bool = True) -> List[RatingCount]:
    """
    Histogram of ratings over the buckets 1..10.

    Args:
        ratings: Observed ratings; values outside the integer buckets are
            counted in the total but land in no bucket
        include_empty: Emit zero-count buckets too

    Returns:
        Buckets in ascending rating order
    """
    counts = Counter(ratings)
    total = len(ratings)

    buckets = []
    for rating in range(settings.MIN_RATING, settings.MAX_RATING + 1):
        count = counts.get(rating, 0)
        if count == 0 and not include_empty:
            continue
        percentage = 100 * count / total if total else 0.0
        buckets.append(RatingCount(rating=rating, count=count, percentage=percentage))
    return buckets


class DistributionCalculator:
    """Per-trip rating distribution, ten buckets per category."""

    def __init__(self, registry: ColumnRegistry = COLUMN_REGISTRY):
        self.registry = registry
        self.deduplicator = EntityDeduplicator(registry)

    def calculate(
        self,
        items: Sequence[RawItem],
        search_id: str,
        survey_type: SurveyType
    ) -> RatingDistribution:
        """
        Distribution of every named entity and simple rating field.

        Entities come first (hotels, tours, restaurants), then the simple
        fields in registry order. Categories without observations are left
        out.
        """
        categories: List[CategoryDistribution] = []

        for kind in DISTRIBUTION_KINDS:
            for name, ratings in self.deduplicator.collect_ratings(items, kind).items():
                if ratings:
                    categories.append(self._category(name, ratings))

        labels = self._field_labels(items)
        for rating_field in RATING_FIELDS:
            ratings = [
                value for value in (
                    get_number(item.column_values, rating_field.name, self.registry)
                    for item in items
                )
                if value is not None
            ]
            if ratings:
                categories.append(self._category(labels[rating_field.name], ratings))

        logger.info(
            f"Built {len(categories)} rating categories for {search_id} "
            f"({survey_type.value}, {len(items)} responses)"
        )
        return RatingDistribution(
            search_id=search_id,
            survey_type=survey_type.value,
            categories=categories
        )

    def _field_labels(self, items: Sequence[RawItem]) -> Dict[str, str]:
        """Display label of each rating field; DMC fields use the first row's names."""
        labels = {}
        for rating_field in RATING_FIELDS:
            label = rating_field.label
            if rating_field.label_field and items:
                label = get_text(
                    items[0].column_values, rating_field.label_field, self.registry
                ) or label
            labels[rating_field.name] = label
        return labels

    @staticmethod
    def _category(name: str, ratings: List[float]) -> CategoryDistribution:
        return CategoryDistribution(
            category=name,
            total_responses=len(ratings),
            distribution=build_rating_counts(ratings, include_empty=True),
            average_rating=mean(ratings)
        )


class SupplierSearch:
    """
    Cross-trip supplier lookup by location or name.

    Suppliers are grouped by the country inferred from the destination and
    ranked by mean rating within each country.
    """

    def __init__(self, registry: ColumnRegistry = COLUMN_REGISTRY):
        self.registry = registry

    def search(
        self,
        items: Sequence[RawItem],
        term: str,
        supplier_type: SupplierType
    ) -> SupplierSearchResult:
        """
        Find rated suppliers of a type matching a search term.

        Args:
            items: Every stored row, regardless of survey type
            term: Location or supplier name, as typed by the user
            supplier_type: Which entity family to scan

        Returns:
            SupplierSearchResult grouped by country
        """
        kind = SUPPLIER_KINDS[supplier_type]
        needle = term.lower().strip()

        suppliers: Dict[str, dict] = {}
        for item in items:
            destination = get_text(item.column_values, "destination", self.registry)

            for name_field, rating_field in kind.slots:
                name = get_text(item.column_values, name_field, self.registry)
                rating = get_number(item.column_values, rating_field, self.registry)
                if not name.strip() or rating is None:
                    continue
                if not matches_search(needle, destination, name):
                    continue

                entry = suppliers.setdefault(name, {"ratings": [], "locations": {}, "countries": {}})
                entry["ratings"].append(rating)
                entry["locations"].setdefault(destination, None)
                entry["countries"].setdefault(infer_country(destination), None)

        groups: Dict[str, List[SupplierSummary]] = {}
        for name, entry in suppliers.items():
            country = next(iter(entry["countries"]))
            groups.setdefault(country, []).append(SupplierSummary(
                name=name,
                location=", ".join(entry["locations"]),
                country=country,
                average_rating=mean(entry["ratings"]),
                total_evaluations=len(entry["ratings"]),
                distribution=build_rating_counts(entry["ratings"], include_empty=False)
            ))

        results = [
            CountryGroup(
                country=country,
                suppliers=sorted(group, key=lambda s: s.average_rating, reverse=True)
            )
            for country, group in groups.items()
        ]

        logger.info(
            f"Supplier search '{term}' ({supplier_type.value}): "
            f"{len(suppliers)} suppliers in {len(results)} countries"
        )
        return SupplierSearchResult(
            supplier_type=supplier_type.value,
            location=term,
            results=results
        )


def matches_search(needle: str, destination: str, name: str) -> bool:
    """
    Search predicate for suppliers.

    needle must already be lowercased and trimmed. Any one of these suffices:
    the needle occurs in the destination, the destination's first segment
    occurs in the needle, or the needle occurs in the supplier name. An empty
    first segment occurs in every needle, so rows without a destination
    match any search.
    """
    destination = destination.lower()
    if needle in destination:
        return True

    place = primary_place(destination)
    if place in needle:
        return True

    return needle in name.lower()
