"""
Column Registry - logical field names to survey board column ids.

Also declares the named-entity kinds (hotel, tour, restaurant, DMC) as slot
configurations and the simple rating fields the engine averages and
histograms. Everything here is read-only after import.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


def _slots(prefix: str, name_ids: List[str], rating_ids: List[str]) -> Dict[str, str]:
    """Expand numbered name/rating column ids into logical entries."""
    columns = {}
    for index, (name_id, rating_id) in enumerate(zip(name_ids, rating_ids), 1):
        columns[f"{prefix}_{index}_name"] = name_id
        columns[f"{prefix}_{index}_rating"] = rating_id
    return columns


# Column ids of board 9242892489
COLUMN_IDS: Mapping[str, str] = MappingProxyType({
    "client": "text_mkrjdnry",
    "destination": "text_mkrb17ct",
    "travel_date": "text_mksq2j87",
    "business_id": "text_mkrkqj1g",
    "survey_type": "color_mksvhn92",

    **_slots(
        "hotel",
        ["text_mkrjf13y", "text_mkrjk4yg", "text_mkwbhmb8", "text_mkwb72y5"],
        ["numeric_mkrjpfxv", "numeric_mkrjg1ar", "numeric_mkwbs9zj", "numeric_mkwbspwv"],
    ),
    **_slots(
        "tour",
        [
            "text_mksdf2av", "text_mksd268p", "text_mksdr0qv", "text_mksdppd8",
            "text_mkwb139p", "text_mkwbr83g", "text_mkwbay38", "text_mkwbcdag",
            "text_mkwbae9e", "text_mkwb7sn7",
        ],
        [
            "numeric_mkrj6132", "numeric_mksdsjte", "numeric_mksdyxw2", "numeric_mksdy42p",
            "numeric_mkwb8wbk", "numeric_mkwbxvtr", "numeric_mkwbvrp7", "numeric_mkwbyg53",
            "numeric_mkwbb4tc", "numeric_mkwbwt0q",
        ],
    ),
    **_slots(
        "restaurant",
        [
            "text_mksvnywe", "text_mksvbzw7", "text_mksv90t7", "text_mksv7z2r",
            "text_mksv5a0x", "text_mkwbx4dw", "text_mkwb3h9m", "text_mkwbvtja",
            "text_mkwbremc", "text_mkwbacpf",
        ],
        [
            "numeric_mksv5c1r", "numeric_mksvwpmx", "numeric_mksvw70j", "numeric_mksvncrj",
            "numeric_mksvcc72", "numeric_mkwbw80h", "numeric_mkwb2tr4", "numeric_mkwb301n",
            "numeric_mkwbr94z", "numeric_mkwbk94v",
        ],
    ),
    **_slots(
        "dmc",
        ["text_mksdhgmp", "text_mksdaqvj"],
        ["numeric_mksdja3e", "numeric_mksdv98h"],
    ),

    # Ratings
    "air_network_score": "numeric_mkrjqam",
    "trip_overall": "numeric_mkrjv5re",
    "seats": "numeric_mksd3094",
    "air_network": "numeric_mksdw5nf",
    "airport_assistance": "numeric_mksdt1bq",
    "connection_time": "numeric_mksds0py",
    "local_guides": "numeric_mksdsem2",
    "transfer": "numeric_mksd391j",
    "food_overall": "numeric_mksqce6j",
    "creative_material": "numeric_mksqebx9",
    "top_before_trip": "numeric_mkw5ggsf",

    # Corporate ratings
    "top_experience": "numeric_mkswcfyz",
    "proposal_quality": "numeric_mkswwx18",
    "communication_materials": "numeric_mksw7pb4",
    "account_manager": "numeric_mkswxtje",
    "corporate_service": "numeric_mksw2p8t",
    "rsvp": "numeric_mksw7wav",
    "field_team": "numeric_mkswe8sf",
    "technology_services": "numeric_mksweem",
    "trip_overall_corporate": "numeric_mkswarb1",
    "would_recommend": "numeric_mkwx31h6",
    "gift_rating": "numeric_mkwzk7ty",
    "destination_rating": "numeric_mkwzag7t",

    # Long-text answers
    "comments": "long_text_mkrjwfwx",
    "destination_suggestion": "long_text_mkrjd4z0",
    "no_show_guests": "long_text_mksdpbqr",
    "airline_review": "long_text_mksdw43g",
    "local_guide_names": "long_text_mksdgq94",
    "local_guide_comments": "long_text_mksdg5nd",
    "transfer_comments": "long_text_mksdxghk",
    "guide_comments": "long_text_mksdfcf4",
    "suggestions": "long_text_mksdxwh3",
    "food_comments": "long_text_mksq9zqr",
    "extra_costs": "long_text_mksq9rnp",
    "tour_comments": "long_text_mksvbj9b",
    "continuous_improvement": "long_text_mksw2m76",
    "experience_comments": "long_text_mkwbsxh0",
    "creation_comments": "long_text_mkwb57md",
    "quality_comments": "long_text_mkwb4g5f",

    # Comment authors
    "guide_name": "text_mksdvk9t",
    "corporate_contact": "text_mkswbqbp",

    # Access keys (mirror of the business id on the key board)
    "key_business_id": "lookup_mkrkwqep",
    "access_key": "text_mkxd7q83",
})


class ColumnRegistry:
    """
    Resolves logical field names to board column ids.

    Unknown names resolve to None; callers treat that as an absent value.
    """

    def __init__(self, columns: Optional[Mapping[str, str]] = None):
        self._columns = MappingProxyType(dict(columns if columns is not None else COLUMN_IDS))
        logger.debug(f"Column registry loaded with {len(self._columns)} fields")

    def resolve(self, logical_name: str) -> Optional[str]:
        """Return the column id for a logical field, or None if unmapped."""
        return self._columns.get(logical_name)

    def __contains__(self, logical_name: str) -> bool:
        return logical_name in self._columns

    def __len__(self) -> int:
        return len(self._columns)


COLUMN_REGISTRY = ColumnRegistry()


@dataclass(frozen=True)
class EntityKind:
    """
    A family of named entities entered in numbered slots.
    Each slot is a (name field, rating field) pair of logical names.
    """
    kind: str
    label: str
    slots: Tuple[Tuple[str, str], ...]


def _entity_kind(kind: str, label: str, slot_count: int) -> EntityKind:
    return EntityKind(
        kind=kind,
        label=label,
        slots=tuple(
            (f"{kind}_{i}_name", f"{kind}_{i}_rating")
            for i in range(1, slot_count + 1)
        )
    )


HOTELS = _entity_kind("hotel", "Hotéis", 4)
TOURS = _entity_kind("tour", "Passeios", 10)
RESTAURANTS = _entity_kind("restaurant", "Restaurantes", 10)
DMCS = _entity_kind("dmc", "DMC", 2)

# Kinds histogrammed per trip, in display order
DISTRIBUTION_KINDS = (HOTELS, TOURS, RESTAURANTS)


@dataclass(frozen=True)
class RatingField:
    """
    A single-column numeric survey question.

    name is both the logical column name and the TripEvaluation attribute.
    wire_key is None for fields the evaluation record does not carry at top
    level. label_field names a text column whose value replaces the label.
    """
    name: str
    label: str
    wire_key: Optional[str] = None
    label_field: Optional[str] = None

    @property
    def in_evaluation(self) -> bool:
        return self.wire_key is not None


# Distribution display order
RATING_FIELDS = (
    RatingField("air_network_score", "Nota Malha Aérea"),
    RatingField("seats", "Assentos", "assentos"),
    RatingField("air_network", "Malha Aérea", "malhaAerea2"),
    RatingField("airport_assistance", "Assistência Aeroporto", "assistenciaAeroporto"),
    RatingField("connection_time", "Tempo Conexão", "tempoConexao"),
    RatingField("dmc_1_rating", "DMC 1", "dmc1", label_field="dmc_1_name"),
    RatingField("dmc_2_rating", "DMC 2", "dmc2", label_field="dmc_2_name"),
    RatingField("local_guides", "Guias Locais", "guiasLocais"),
    RatingField("transfer", "Transfer", "transfer"),
    RatingField("creative_material", "Material Criação", "materialCriacao"),
    RatingField("food_overall", "Alimentação"),  # Carried by the food section
    RatingField("top_experience", "Experiência com a Top", "experienciaTop"),
    RatingField("proposal_quality", "Qualidade e Criatividade da Proposta", "qualidadeProposta"),
    RatingField("communication_materials", "Materiais Comunicação", "materiaisComunicacao"),
    RatingField("account_manager", "Gerente de Contas", "gerenteContas"),
    RatingField("corporate_service", "Atendimento Corporativo", "atendimentoCorporativo"),
    RatingField("rsvp", "RSVP", "rsvp"),
    RatingField("field_team", "Equipe de Campo", "equipeCampo"),
    RatingField("trip_overall_corporate", "Viagem em Geral", "viagemGeralCorporativo"),
    RatingField("technology_services", "Serviços de Tecnologia", "servicosTecnologia"),
    RatingField("would_recommend", "Indicaria a Top?", "indicariaTop"),
    RatingField("top_before_trip", "Top Antes da Viagem", "topAntesViagem"),
    RatingField("trip_overall", "Viagem Geral", "viagemGeral"),
)

FOOD_RATING_FIELD = "food_overall"
