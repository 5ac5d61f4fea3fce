"""
Multi-Item Aggregator.

Folds every response sharing a business identifier into one
TripEvaluation: entity ratings are deduplicated and averaged, simple
ratings are averaged, comments are merged.
"""

import logging
from typing import Optional, Sequence

from tripeval.engine.comments import CommentCollector
from tripeval.engine.deduplication import EntityDeduplicator, mean
from tripeval.engine.normalization import AIR, FOOD, GENERAL, LODGING, bucket_free_text
from tripeval.models.evaluation import FoodSection, TripEvaluation
from tripeval.models.raw_item import RawItem
from tripeval.models.survey import SurveyType
from tripeval.registry.column_registry import (
    COLUMN_REGISTRY,
    FOOD_RATING_FIELD,
    HOTELS,
    RATING_FIELDS,
    RESTAURANTS,
    TOURS,
    ColumnRegistry,
)
from tripeval.utils.accessors import get_number, get_text

logger = logging.getLogger(__name__)


class MultiItemAggregator:
    """
    Aggregates the rows of one trip.

    Descriptive fields (client, destination, travel date, DMC names, free-text
    buckets) come from the first row only; no reconciliation is attempted
    when respondents disagree.
    """

    def __init__(self, registry: ColumnRegistry = COLUMN_REGISTRY):
        self.registry = registry
        self.deduplicator = EntityDeduplicator(registry)
        self.comment_collector = CommentCollector(registry)

    def aggregate(self, items: Sequence[RawItem], survey_type: SurveyType) -> TripEvaluation:
        """
        Build the aggregated evaluation.

        Args:
            items: Non-empty list of rows sharing one business identifier
            survey_type: Selects the long-text questions and author column

        Returns:
            TripEvaluation with mean ratings

        Raises:
            ValueError: If items is empty
        """
        if not items:
            raise ValueError("Cannot aggregate an empty item list")

        first = items[0]
        bag = first.column_values
        buckets = bucket_free_text(first)

        ratings = {
            rating_field.name: self.average_field(items, rating_field.name)
            for rating_field in RATING_FIELDS
            if rating_field.in_evaluation
        }

        evaluation = TripEvaluation(
            evaluation_id=first.item_id,
            client=get_text(bag, "client", self.registry),
            destination=get_text(bag, "destination", self.registry),
            travel_date=get_text(bag, "travel_date", self.registry),
            hotels=self.deduplicator.deduplicate(items, HOTELS),
            air_travel=buckets[AIR],
            food=FoodSection(
                questions=buckets[FOOD],
                restaurants=self.deduplicator.deduplicate(items, RESTAURANTS),
                overall_rating=self.average_field(items, FOOD_RATING_FIELD)
            ),
            lodging=buckets[LODGING],
            general=buckets[GENERAL],
            tours=self.deduplicator.deduplicate(items, TOURS),
            dmc_1_name=get_text(bag, "dmc_1_name", self.registry),
            dmc_2_name=get_text(bag, "dmc_2_name", self.registry),
            long_text_comments=self.comment_collector.collect(items, survey_type),
            **ratings
        )

        logger.info(
            f"Aggregated {len(items)} responses into evaluation {evaluation.evaluation_id} "
            f"({len(evaluation.hotels)} hotels, {len(evaluation.tours)} tours, "
            f"{len(evaluation.food.restaurants)} restaurants)"
        )
        return evaluation

    def average_field(self, items: Sequence[RawItem], field: str) -> Optional[float]:
        """Mean of a numeric field over the items that report it."""
        values = [
            value for value in (
                get_number(item.column_values, field, self.registry) for item in items
            )
            if value is not None
        ]
        return mean(values)
