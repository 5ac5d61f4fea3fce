"""
Comment Collector.

Gathers the long-text answers of a survey type into display comments,
signing each contribution with the respondent's name where the survey
type records one.
"""

import logging
from typing import Dict, List, Optional, Sequence

import config.settings as settings
from tripeval.models.evaluation import LongTextComment
from tripeval.models.raw_item import RawItem
from tripeval.models.survey import SurveyType
from tripeval.registry.column_registry import COLUMN_REGISTRY, ColumnRegistry
from tripeval.utils.accessors import get_text

logger = logging.getLogger(__name__)


# Display title -> logical field, per survey type
LONG_TEXT_QUESTIONS: Dict[SurveyType, Dict[str, str]] = {
    SurveyType.GUIDES: {
        "Avaliação das companhias aéreas": "airline_review",
        "Nome dos guias locais": "local_guide_names",
        "Comentários sobre os guias locais": "local_guide_comments",
        "Comentários sobre transfer": "transfer_comments",
        "Comentários feitos pelos guias que avaliaram": "guide_comments",
        "Sugestões dos guias que avaliaram": "suggestions",
        "Custos extras?": "extra_costs",
        "Comentários sobre passeio": "tour_comments",
    },
    SurveyType.GUESTS: {
        "Comentários gerais": "comments",
        "Sugestões de destinos": "destination_suggestion",
        "Comentários sobre passeios": "tour_comments",
    },
    SurveyType.CORPORATE: {
        "Comentários": "comments",
        "Sugestão Destino": "destination_suggestion",
        "Convidados No show": "no_show_guests",
        "Avaliação cias aéreas": "airline_review",
        "Nome guias locais": "local_guide_names",
        "Comentários guias locais": "local_guide_comments",
        "Comentários transfer": "transfer_comments",
        "Comentários Guia": "guide_comments",
        "Sugestões": "suggestions",
        "Comentários alimentação": "food_comments",
        "Quais custos extras?": "extra_costs",
        "Comentário passeio": "tour_comments",
        "Por favor deixe comentários ou sugestões": "continuous_improvement",
        "Comente experiência": "experience_comments",
        "Comente criação": "creation_comments",
        "Comente Qualidade": "quality_comments",
    },
}

# Column holding the respondent's name; guests answer anonymously
AUTHOR_FIELDS: Dict[SurveyType, Optional[str]] = {
    SurveyType.GUIDES: "guide_name",
    SurveyType.GUESTS: None,
    SurveyType.CORPORATE: "corporate_contact",
}


class CommentCollector:
    """Builds LongTextComment lists for one or many rows of a survey type."""

    def __init__(self, registry: ColumnRegistry = COLUMN_REGISTRY):
        self.registry = registry

    def collect(self, items: Sequence[RawItem], survey_type: SurveyType) -> List[LongTextComment]:
        """
        One comment per title, merging every row's answer.

        Contributions are rendered as "{text}\\n\\n— {author}" (or just the
        text when unsigned) and joined with the comment separator. Titles
        nobody answered are omitted.
        """
        comments = []

        for title, field in LONG_TEXT_QUESTIONS[survey_type].items():
            contributions = []
            for item in items:
                text = get_text(item.column_values, field, self.registry)
                if not text.strip():
                    continue
                author = self._author(item, survey_type)
                contributions.append(
                    f"{text}{settings.AUTHOR_PREFIX}{author}" if author else text
                )

            if contributions:
                comments.append(LongTextComment(
                    title=title,
                    content=settings.COMMENT_SEPARATOR.join(contributions)
                ))

        logger.debug(f"Collected {len(comments)} comments from {len(items)} {survey_type.value} items")
        return comments

    def collect_single(self, item: RawItem, survey_type: SurveyType) -> List[LongTextComment]:
        """One comment per answered title of a single row, author kept apart."""
        comments = []
        author = self._author(item, survey_type) or None

        for title, field in LONG_TEXT_QUESTIONS[survey_type].items():
            content = get_text(item.column_values, field, self.registry)
            if content.strip():
                comments.append(LongTextComment(title=title, content=content, author=author))

        return comments

    def _author(self, item: RawItem, survey_type: SurveyType) -> str:
        author_field = AUTHOR_FIELDS[survey_type]
        if author_field is None:
            return ""
        return get_text(item.column_values, author_field, self.registry)
