"""
Trip evaluation data model.

The normalized record rebuilt on every read from the rows sharing one
business identifier. Never persisted.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from tripeval.registry.column_registry import RATING_FIELDS


@dataclass
class NamedRating:
    """
    A hotel, tour, restaurant or DMC with its rating.
    Rating is None when nobody rated the entity.
    """
    name: str
    rating: Optional[float] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "rating": self.rating}


@dataclass
class QuestionAnswer:
    question: str
    answer: str

    def to_dict(self) -> dict:
        return {"question": self.question, "answer": self.answer}


@dataclass
class LongTextComment:
    """Free-text answer to one long-text question, optionally signed."""
    title: str
    content: str
    author: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"title": self.title, "content": self.content}
        if self.author:
            data["author"] = self.author
        return data


@dataclass
class FoodSection:
    questions: List[QuestionAnswer] = field(default_factory=list)
    restaurants: List[NamedRating] = field(default_factory=list)
    overall_rating: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "questions": [q.to_dict() for q in self.questions],
            "restaurantes": [r.to_dict() for r in self.restaurants],
            "alimentacaoGeral": self.overall_rating,
        }


@dataclass
class TripEvaluation:
    """
    Full evaluation of one trip.

    Simple rating attributes are named after the rating fields of the
    column registry; see RATING_FIELDS for their wire keys.
    """
    evaluation_id: str
    client: str = ""
    destination: str = ""
    travel_date: str = ""
    hotels: List[NamedRating] = field(default_factory=list)
    air_travel: List[QuestionAnswer] = field(default_factory=list)
    food: FoodSection = field(default_factory=FoodSection)
    lodging: List[QuestionAnswer] = field(default_factory=list)
    general: List[QuestionAnswer] = field(default_factory=list)
    tours: List[NamedRating] = field(default_factory=list)
    dmc_1_name: str = ""
    dmc_2_name: str = ""
    long_text_comments: List[LongTextComment] = field(default_factory=list)

    # Simple ratings
    top_before_trip: Optional[float] = None
    trip_overall: Optional[float] = None
    would_recommend: Optional[float] = None
    seats: Optional[float] = None
    air_network: Optional[float] = None
    airport_assistance: Optional[float] = None
    connection_time: Optional[float] = None
    dmc_1_rating: Optional[float] = None
    dmc_2_rating: Optional[float] = None
    local_guides: Optional[float] = None
    transfer: Optional[float] = None
    creative_material: Optional[float] = None
    top_experience: Optional[float] = None
    proposal_quality: Optional[float] = None
    communication_materials: Optional[float] = None
    account_manager: Optional[float] = None
    corporate_service: Optional[float] = None
    rsvp: Optional[float] = None
    field_team: Optional[float] = None
    trip_overall_corporate: Optional[float] = None
    technology_services: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to the JSON shape the presentation layer reads."""
        data = {
            "id": self.evaluation_id,
            "cliente": self.client,
            "destino": self.destination,
            "dataViagem": self.travel_date,
            "hotels": [h.to_dict() for h in self.hotels],
            "malhaAerea": [qa.to_dict() for qa in self.air_travel],
            "alimentacao": self.food.to_dict(),
            "acomodacao": [qa.to_dict() for qa in self.lodging],
            "geral": [qa.to_dict() for qa in self.general],
            "passeios": [t.to_dict() for t in self.tours],
            "nomeDMC1": self.dmc_1_name,
            "nomeDMC2": self.dmc_2_name,
        }
        for rating_field in RATING_FIELDS:
            if rating_field.in_evaluation:
                data[rating_field.wire_key] = getattr(self, rating_field.name)
        data["longTextComments"] = [c.to_dict() for c in self.long_text_comments]
        return data
