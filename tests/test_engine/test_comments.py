"""
Unit tests for the Comment Collector.
"""

import pytest

from tripeval.engine.comments import LONG_TEXT_QUESTIONS, CommentCollector
from tripeval.models.evaluation import LongTextComment
from tripeval.models.survey import SurveyType


@pytest.fixture
def collector():
    return CommentCollector()


def test_multi_item_contributions_joined_with_authors(collector, make_item):
    items = [
        make_item("1", survey_type="Guias", guide_name="Ana", guide_comments="text1"),
        make_item("2", survey_type="Guias", guide_name="Bruno", guide_comments="text2"),
    ]

    comments = collector.collect(items, SurveyType.GUIDES)

    assert comments == [LongTextComment(
        title="Comentários feitos pelos guias que avaliaram",
        content="text1\n\n— Ana\n\n---\n\ntext2\n\n— Bruno"
    )]


def test_guest_comments_are_unsigned(collector, make_item):
    items = [
        make_item("1", comments="Adorei a viagem", guide_name="Ana"),
        make_item("2", comments="Hotel muito bom"),
    ]

    comments = collector.collect(items, SurveyType.GUESTS)

    assert len(comments) == 1
    assert comments[0].title == "Comentários gerais"
    assert comments[0].content == "Adorei a viagem\n\n---\n\nHotel muito bom"
    assert comments[0].author is None


def test_corporate_author_from_contact_field(collector, make_item):
    items = [make_item("1", survey_type="Corporativo", corporate_contact="Carla", food_comments="Ótimo")]

    comments = collector.collect(items, SurveyType.CORPORATE)

    assert comments[0].title == "Comentários alimentação"
    assert comments[0].content == "Ótimo\n\n— Carla"


def test_missing_author_renders_text_only(collector, make_item):
    items = [
        make_item("1", survey_type="Guias", suggestions="Mais tempo livre"),
        make_item("2", survey_type="Guias", guide_name="Bruno", suggestions="Menos ônibus"),
    ]

    comments = collector.collect(items, SurveyType.GUIDES)

    assert comments[0].content == "Mais tempo livre\n\n---\n\nMenos ônibus\n\n— Bruno"


def test_blank_titles_are_omitted(collector, make_item):
    items = [make_item("1", comments="   "), make_item("2")]

    assert collector.collect(items, SurveyType.GUESTS) == []


def test_titles_follow_question_order(collector, make_item):
    items = [make_item(
        "1", survey_type="Guias",
        tour_comments="Passeio ótimo", airline_review="Voo atrasou",
    )]

    titles = [c.title for c in collector.collect(items, SurveyType.GUIDES)]

    assert titles == ["Avaliação das companhias aéreas", "Comentários sobre passeio"]


def test_single_item_keeps_author_apart(collector, make_item):
    item = make_item("1", survey_type="Guias", guide_name="Ana", transfer_comments="Pontual")

    comments = collector.collect_single(item, SurveyType.GUIDES)

    assert comments == [LongTextComment(title="Comentários sobre transfer", content="Pontual", author="Ana")]


def test_single_item_guest_has_no_author(collector, make_item):
    item = make_item("1", destination_suggestion="Japão", guide_name="Ana")

    comments = collector.collect_single(item, SurveyType.GUESTS)

    assert comments == [LongTextComment(title="Sugestões de destinos", content="Japão", author=None)]


def test_each_survey_type_has_questions():
    assert len(LONG_TEXT_QUESTIONS[SurveyType.GUIDES]) == 8
    assert len(LONG_TEXT_QUESTIONS[SurveyType.GUESTS]) == 3
    assert len(LONG_TEXT_QUESTIONS[SurveyType.CORPORATE]) == 16
