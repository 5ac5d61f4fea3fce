"""
Survey discriminators.

Survey types select the long-text question set and the author column;
supplier types select which named-entity family a supplier search scans.
"""

from enum import Enum

from tripeval.errors import InvalidArgumentError


class SurveyType(str, Enum):
    """The "tipo" column of a survey row."""
    GUIDES = "Guias"
    GUESTS = "Convidados"
    CORPORATE = "Corporativo"

    @classmethod
    def parse(cls, value: str) -> "SurveyType":
        """Resolve a label (Portuguese or English) to a survey type."""
        return _parse(cls, value, _SURVEY_ALIASES, "survey type")


class SupplierType(str, Enum):
    """Supplier families available to the cross-trip search."""
    RESTAURANTS = "Restaurantes"
    HOTELS = "Hotéis"
    DMC = "DMC"
    TOURS = "Passeios"

    @classmethod
    def parse(cls, value: str) -> "SupplierType":
        """Resolve a label (Portuguese or English) to a supplier type."""
        return _parse(cls, value, _SUPPLIER_ALIASES, "supplier type")


_SURVEY_ALIASES = {
    "guides": "Guias",
    "guests": "Convidados",
    "corporate": "Corporativo",
}

_SUPPLIER_ALIASES = {
    "restaurants": "Restaurantes",
    "hotels": "Hotéis",
    "hoteis": "Hotéis",
    "tours": "Passeios",
}


def _parse(enum_cls, value, aliases, what):
    if not value or not str(value).strip():
        raise InvalidArgumentError(f"Missing {what}")

    label = str(value).strip()
    label = aliases.get(label.lower(), label)
    for member in enum_cls:
        if member.value.lower() == label.lower():
            return member

    raise InvalidArgumentError(f"Invalid {what}: '{value}'")
