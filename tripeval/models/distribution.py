"""
Rating distribution data models.

Histograms over integer ratings 1-10, used by the per-trip distribution
view and by the supplier search.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RatingCount:
    """One histogram bucket."""
    rating: int
    count: int
    percentage: float  # 100 * count / total responses of the category

    def to_dict(self) -> dict:
        return {
            "rating": self.rating,
            "count": self.count,
            "percentage": self.percentage
        }


@dataclass
class CategoryDistribution:
    """Histogram of one named entity or one simple rating field."""
    category: str
    total_responses: int
    distribution: List[RatingCount] = field(default_factory=list)
    average_rating: Optional[float] = None  # Mean of every observed rating, bucketed or not

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "totalResponses": self.total_responses,
            "distribution": [bucket.to_dict() for bucket in self.distribution]
        }


@dataclass
class RatingDistribution:
    search_id: str
    survey_type: str
    categories: List[CategoryDistribution] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "searchId": self.search_id,
            "tipo": self.survey_type,
            "categories": [c.to_dict() for c in self.categories]
        }


@dataclass
class SupplierSummary:
    """
    A supplier found by the cross-trip search.
    Distribution omits zero-count buckets.
    """
    name: str
    location: str  # Every destination the supplier was rated in, comma-joined
    country: str
    average_rating: float
    total_evaluations: int
    distribution: List[RatingCount] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "location": self.location,
            "country": self.country,
            "averageRating": self.average_rating,
            "totalEvaluations": self.total_evaluations,
            "distribution": [bucket.to_dict() for bucket in self.distribution]
        }


@dataclass
class CountryGroup:
    country: str
    suppliers: List[SupplierSummary] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "country": self.country,
            "suppliers": [s.to_dict() for s in self.suppliers]
        }


@dataclass
class SupplierSearchResult:
    supplier_type: str
    location: str  # Search term as the caller sent it
    results: List[CountryGroup] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.supplier_type,
            "location": self.location,
            "results": [group.to_dict() for group in self.results]
        }
