"""
Unit tests for the Distribution Calculator and the supplier search.
"""

import pytest

from tripeval.engine.distribution import (
    DistributionCalculator,
    SupplierSearch,
    build_rating_counts,
    matches_search,
)
from tripeval.models.survey import SupplierType, SurveyType


def _counts(category):
    return {bucket.rating: bucket.count for bucket in category.distribution}


def test_build_rating_counts_full_buckets():
    buckets = build_rating_counts([8, 6, 8, 10])

    assert [b.rating for b in buckets] == list(range(1, 11))
    assert sum(b.count for b in buckets) == 4
    assert buckets[7].count == 2
    assert buckets[7].percentage == pytest.approx(50.0)
    assert buckets[0].percentage == 0.0


def test_build_rating_counts_omits_empty_buckets():
    buckets = build_rating_counts([9.0, 9.0, 3.0], include_empty=False)

    assert [(b.rating, b.count) for b in buckets] == [(3, 1), (9, 2)]
    assert buckets[1].percentage == pytest.approx(200 / 3)


def test_build_rating_counts_empty_input():
    buckets = build_rating_counts([])

    assert len(buckets) == 10
    assert all(b.count == 0 and b.percentage == 0.0 for b in buckets)


def test_trip_distribution_for_hotel(make_item):
    items = [
        make_item("1", hotel_1_name="Hotel X", hotel_1_rating=8),
        make_item("2", hotel_1_name="Hotel X", hotel_1_rating=6),
    ]

    distribution = DistributionCalculator().calculate(items, "100", SurveyType.GUESTS)

    assert distribution.search_id == "100"
    assert distribution.survey_type == "Convidados"
    assert len(distribution.categories) == 1

    hotel = distribution.categories[0]
    assert hotel.category == "Hotel X"
    assert hotel.total_responses == 2
    assert len(hotel.distribution) == 10
    assert _counts(hotel) == {r: (1 if r in (6, 8) else 0) for r in range(1, 11)}
    assert hotel.distribution[7].percentage == pytest.approx(50.0)
    assert hotel.distribution[5].percentage == pytest.approx(50.0)


def test_trip_distribution_merges_slots_of_same_name(make_item):
    items = [
        make_item("1", tour_1_name="Louvre", tour_1_rating=9),
        make_item("2", tour_3_name="Louvre", tour_3_rating=9),
    ]

    categories = DistributionCalculator().calculate(items, "100", SurveyType.GUESTS).categories

    assert [c.category for c in categories] == ["Louvre"]
    assert categories[0].total_responses == 2


def test_trip_distribution_skips_unrated_categories(make_item):
    items = [make_item("1", hotel_1_name="Hotel sem nota", seats=7)]

    categories = DistributionCalculator().calculate(items, "100", SurveyType.GUESTS).categories

    assert [c.category for c in categories] == ["Assentos"]


def test_trip_distribution_category_order(make_item):
    items = [make_item(
        "1",
        trip_overall=9, air_network_score=5, seats=7,
        restaurant_1_name="Cantina", restaurant_1_rating=8,
        hotel_1_name="Hotel X", hotel_1_rating=6,
        tour_1_name="Louvre", tour_1_rating=10,
    )]

    categories = DistributionCalculator().calculate(items, "100", SurveyType.GUESTS).categories

    assert [c.category for c in categories] == [
        "Hotel X", "Louvre", "Cantina", "Nota Malha Aérea", "Assentos", "Viagem Geral",
    ]


def test_trip_distribution_dmc_labels(make_item):
    items = [
        make_item("1", dmc_1_name="Agência Sol", dmc_1_rating=8, dmc_2_rating=7),
        make_item("2", dmc_1_name="Outra", dmc_1_rating=6),
    ]

    categories = DistributionCalculator().calculate(items, "100", SurveyType.GUESTS).categories
    by_name = {c.category: c for c in categories}

    assert by_name["Agência Sol"].total_responses == 2
    assert by_name["DMC 2"].total_responses == 1
    assert "Outra" not in by_name


def test_distribution_bucket_totals_match(make_item):
    items = [make_item(str(i), trip_overall=r) for i, r in enumerate([10, 9, 9, 7, 1])]

    category = DistributionCalculator().calculate(items, "100", SurveyType.GUESTS).categories[0]

    assert sum(b.count for b in category.distribution) == category.total_responses == 5
    for bucket in category.distribution:
        assert bucket.percentage == pytest.approx(100 * bucket.count / 5)


@pytest.mark.parametrize("needle,destination,name,expected", [
    ("paris", "Paris, França", "Hotel Lutetia", True),
    ("paris, frança", "Paris, França", "Hotel Lutetia", True),
    ("hotel em paris", "Paris, França", "Hotel Lutetia", True),
    ("lutetia", "Roma, Itália", "Hotel Lutetia", True),
    ("londres", "Paris, França", "Hotel Lutetia", False),
    ("londres", "", "Hotel Lutetia", True),
])
def test_matches_search(needle, destination, name, expected):
    assert matches_search(needle, destination, name) is expected


@pytest.fixture
def supplier_items(make_item):
    return [
        make_item("1", destination="Paris, França", hotel_1_name="Hotel Lutetia", hotel_1_rating=9,
                  hotel_2_name="Ibis Paris", hotel_2_rating=6),
        make_item("2", destination="Paris, França", survey_type="Guias",
                  hotel_1_name="Hotel Lutetia", hotel_1_rating=7),
        make_item("3", destination="Lyon, França", hotel_1_name="Ibis Paris", hotel_1_rating=8),
        make_item("4", destination="Paris, Texas, EUA", hotel_1_name="Paris Inn", hotel_1_rating=10),
        make_item("5", destination="Roma, Itália", hotel_1_name="Hotel Roma", hotel_1_rating=10),
        make_item("6", destination="Paris, França", hotel_3_name="Sem Nota"),
    ]


def test_supplier_search_groups_by_country(supplier_items):
    result = SupplierSearch().search(supplier_items, "Paris", SupplierType.HOTELS)

    assert result.supplier_type == "Hotéis"
    assert result.location == "Paris"
    assert [g.country for g in result.results] == ["França", "EUA"]

    france = result.results[0]
    assert [s.name for s in france.suppliers] == ["Hotel Lutetia", "Ibis Paris"]
    assert france.suppliers[0].average_rating == pytest.approx(8.0)
    assert france.suppliers[0].total_evaluations == 2
    assert france.suppliers[1].location == "Paris, França, Lyon, França"


def test_supplier_search_omits_empty_buckets(supplier_items):
    result = SupplierSearch().search(supplier_items, "paris", SupplierType.HOTELS)
    lutetia = result.results[0].suppliers[0]

    assert [(b.rating, b.count) for b in lutetia.distribution] == [(7, 1), (9, 1)]
    assert sum(b.count for b in lutetia.distribution) == lutetia.total_evaluations


def test_supplier_search_sorted_descending(make_item):
    items = [
        make_item("1", destination="Roma, Itália", restaurant_1_name="A", restaurant_1_rating=6),
        make_item("2", destination="Roma, Itália", restaurant_1_name="B", restaurant_1_rating=9),
        make_item("3", destination="Roma, Itália", restaurant_1_name="C", restaurant_1_rating=7),
    ]

    result = SupplierSearch().search(items, " ROMA ", SupplierType.RESTAURANTS)

    assert [s.name for s in result.results[0].suppliers] == ["B", "C", "A"]


def test_supplier_search_dmc(make_item):
    items = [make_item("1", destination="Lisboa, Portugal", dmc_2_name="Lusa DMC", dmc_2_rating=8)]

    result = SupplierSearch().search(items, "lisboa", SupplierType.DMC)

    assert result.results[0].country == "Portugal"
    assert result.results[0].suppliers[0].name == "Lusa DMC"


def test_supplier_search_no_match(supplier_items):
    result = SupplierSearch().search(supplier_items, "Tóquio", SupplierType.HOTELS)
    assert result.results == []


def test_supplier_without_destination_matches_any_search(make_item):
    items = [make_item("1", destination="", hotel_1_name="Hotel Sem Destino", hotel_1_rating=9)]

    result = SupplierSearch().search(items, "Paris", SupplierType.HOTELS)

    assert [g.country for g in result.results] == [""]
    assert result.results[0].suppliers[0].name == "Hotel Sem Destino"
    assert result.results[0].suppliers[0].location == ""
