"""
Evaluation Service.

Read-only query operations over the item store: trip evaluation, rating
distribution and supplier search. Every call reads the store afresh.
"""

import logging
from typing import List

import config.settings as settings
from tripeval.engine.aggregation import MultiItemAggregator
from tripeval.engine.distribution import DistributionCalculator, SupplierSearch
from tripeval.engine.normalization import SingleItemNormalizer
from tripeval.errors import InvalidArgumentError, NotFoundError
from tripeval.models.distribution import RatingDistribution, SupplierSearchResult
from tripeval.models.evaluation import TripEvaluation
from tripeval.models.raw_item import RawItem
from tripeval.models.survey import SupplierType, SurveyType
from tripeval.registry.column_registry import COLUMN_REGISTRY, ColumnRegistry
from tripeval.utils.accessors import get_text
from tripeval.utils.storage import ItemStore

logger = logging.getLogger(__name__)


class EvaluationService:
    """
    Entry point for the presentation layer.

    Coordinates:
    store lookup → (normalizer | aggregator) for evaluations,
    store lookup → distribution calculator for histograms,
    full store scan → supplier search.
    """

    def __init__(self, store: ItemStore, registry: ColumnRegistry = COLUMN_REGISTRY):
        """
        Initialize the service.

        Args:
            store: Item store to read from
            registry: Column registry shared by every engine component
        """
        self.store = store
        self.registry = registry

        self.normalizer = SingleItemNormalizer(registry)
        self.aggregator = MultiItemAggregator(registry)
        self.distribution_calculator = DistributionCalculator(registry)
        self.supplier_search = SupplierSearch(registry)

    def get_evaluation(self, business_id: str, survey_type: str) -> TripEvaluation:
        """
        Evaluation of a trip.

        Args:
            business_id: Business identifier shared by the trip's responses
            survey_type: Guias, Convidados or Corporativo

        Raises:
            InvalidArgumentError: Missing business id or unknown survey type
            NotFoundError: No stored response for the business id
        """
        tipo = SurveyType.parse(survey_type)
        items = self._matching_items(business_id, tipo)

        if len(items) == 1:
            return self.normalizer.normalize(items[0], tipo)
        return self.aggregator.aggregate(items, tipo)

    def get_distribution(self, business_id: str, survey_type: str) -> RatingDistribution:
        """
        Rating distribution of a trip.

        Raises:
            InvalidArgumentError: Missing business id or unknown survey type
            NotFoundError: No stored response for the business id
        """
        tipo = SurveyType.parse(survey_type)
        items = self._matching_items(business_id, tipo)
        return self.distribution_calculator.calculate(items, business_id, tipo)

    def search_suppliers(self, location_or_name: str, supplier_type: str) -> SupplierSearchResult:
        """
        Rank suppliers of a type by location or name.

        Raises:
            InvalidArgumentError: Missing search term or unknown supplier type
        """
        if not location_or_name or not location_or_name.strip():
            raise InvalidArgumentError("location is required")
        kind = SupplierType.parse(supplier_type)

        return self.supplier_search.search(self.store.get_all_items(), location_or_name, kind)

    def get_evaluation_by_key(self, key: str) -> TripEvaluation:
        """
        Guest evaluation of the trip an access key belongs to.

        Raises:
            NotFoundError: Unknown key, or no guest response for its trip
        """
        business_id = self._resolve_key(key)
        return self.get_evaluation(business_id, settings.KEY_LOOKUP_SURVEY_TYPE)

    def get_distribution_by_key(self, key: str) -> RatingDistribution:
        """
        Guest rating distribution of the trip an access key belongs to.
        The distribution is reported under the key, not the business id.
        """
        business_id = self._resolve_key(key)
        distribution = self.get_distribution(business_id, settings.KEY_LOOKUP_SURVEY_TYPE)
        distribution.search_id = key
        return distribution

    def _resolve_key(self, key: str) -> str:
        if not key or not key.strip():
            raise InvalidArgumentError("key is required")

        record = self.store.find_key(key)
        if record is None:
            raise NotFoundError(f"Key not found: {key}", key)

        logger.info(f"Key {key} resolved to business id {record['business_id']}")
        return record["business_id"]

    def _matching_items(self, business_id: str, survey_type: SurveyType) -> List[RawItem]:
        if not business_id or not business_id.strip():
            raise InvalidArgumentError("business id is required")

        items = [
            item for item in self.store.get_items_by_type(survey_type.value)
            if get_text(item.column_values, "business_id", self.registry) == business_id
        ]

        if not items:
            raise NotFoundError(
                f"No {survey_type.value} evaluation found for business id {business_id}",
                business_id
            )

        logger.info(f"Found {len(items)} items for business id {business_id}")
        return items
