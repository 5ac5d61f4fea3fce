"""
Single-Item Normalizer.

Reshapes one board row into a TripEvaluation without any averaging, and
buckets the row's free-text answers by topic.
"""

import logging
from typing import Dict, List

import config.settings as settings
from tripeval.engine.comments import CommentCollector
from tripeval.models.evaluation import FoodSection, NamedRating, QuestionAnswer, TripEvaluation
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
    EntityKind,
)
from tripeval.utils.accessors import get_number, get_text

logger = logging.getLogger(__name__)

AIR = "air"
FOOD = "food"
LODGING = "lodging"
GENERAL = "general"

# Checked in this order; the first family with a hit wins
TOPIC_KEYWORDS = (
    (AIR, settings.AIR_KEYWORDS),
    (FOOD, settings.FOOD_KEYWORDS),
    (LODGING, settings.LODGING_KEYWORDS),
)


def classify_question(question: str) -> str:
    """
    Topic bucket of a free-text question.

    Case-insensitive substring match against the air, food and lodging
    keyword families, in that order. Anything unmatched is general.
    """
    lowered = question.lower()
    for topic, keywords in TOPIC_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return topic
    return GENERAL


def bucket_free_text(item: RawItem) -> Dict[str, List[QuestionAnswer]]:
    """
    Bucket every long enough text column of an item by topic.

    Only columns declared as "text" are considered. The display text is
    both the question and the answer.
    """
    buckets: Dict[str, List[QuestionAnswer]] = {AIR: [], FOOD: [], LODGING: [], GENERAL: []}

    for column in item.column_values.values():
        if column.type != "text" or not column.text:
            continue
        if len(column.text) <= settings.MIN_QUESTION_LENGTH:
            continue
        buckets[classify_question(column.text)].append(
            QuestionAnswer(question=column.text, answer=column.text)
        )

    return buckets


class SingleItemNormalizer:
    """
    Transforms exactly one row into a TripEvaluation.

    Every non-empty slot becomes its own NamedRating; a name repeated in
    two slots is kept twice.
    """

    def __init__(self, registry: ColumnRegistry = COLUMN_REGISTRY):
        self.registry = registry
        self.comment_collector = CommentCollector(registry)

    def normalize(self, item: RawItem, survey_type: SurveyType) -> TripEvaluation:
        """
        Build the evaluation of a single response.

        Args:
            item: The only row for the business identifier
            survey_type: Selects the long-text questions and author column

        Returns:
            TripEvaluation with the row's raw ratings
        """
        bag = item.column_values
        buckets = bucket_free_text(item)

        ratings = {
            rating_field.name: get_number(bag, rating_field.name, self.registry)
            for rating_field in RATING_FIELDS
            if rating_field.in_evaluation
        }

        evaluation = TripEvaluation(
            evaluation_id=item.item_id,
            client=get_text(bag, "client", self.registry),
            destination=get_text(bag, "destination", self.registry),
            travel_date=get_text(bag, "travel_date", self.registry),
            hotels=self._slot_entities(item, HOTELS),
            air_travel=buckets[AIR],
            food=FoodSection(
                questions=buckets[FOOD],
                restaurants=self._slot_entities(item, RESTAURANTS),
                overall_rating=get_number(bag, FOOD_RATING_FIELD, self.registry)
            ),
            lodging=buckets[LODGING],
            general=buckets[GENERAL],
            tours=self._slot_entities(item, TOURS),
            dmc_1_name=get_text(bag, "dmc_1_name", self.registry),
            dmc_2_name=get_text(bag, "dmc_2_name", self.registry),
            long_text_comments=self.comment_collector.collect_single(item, survey_type),
            **ratings
        )

        logger.debug(
            f"Normalized item {item.item_id}: {len(evaluation.hotels)} hotels, "
            f"{len(evaluation.tours)} tours, {len(evaluation.food.restaurants)} restaurants"
        )
        return evaluation

    def _slot_entities(self, item: RawItem, kind: EntityKind) -> List[NamedRating]:
        entities = []
        for name_field, rating_field in kind.slots:
            name = get_text(item.column_values, name_field, self.registry)
            if not name.strip():
                continue
            entities.append(NamedRating(
                name=name,
                rating=get_number(item.column_values, rating_field, self.registry)
            ))
        return entities
