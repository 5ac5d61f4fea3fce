"""
Configuration settings for TripEval.

Centralized configuration for the aggregation engine, the item store and the CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("TRIPEVAL_DATA_ROOT", str(PROJECT_ROOT / "data")))
OUTPUT_ROOT = Path(os.getenv("TRIPEVAL_OUTPUT_ROOT", str(PROJECT_ROOT / "output")))

# Survey board the webhooks come from
BOARD_ID = os.getenv("TRIPEVAL_BOARD_ID", "9242892489")

# Free-text bucketing
MIN_QUESTION_LENGTH = 10  # Shorter texts are not treated as questions
AIR_KEYWORDS = ("malha", "aérea", "voo")
FOOD_KEYWORDS = ("alimentação", "restaurante", "comida")
LODGING_KEYWORDS = ("acomodação", "hotel")

# Comment rendering
COMMENT_SEPARATOR = "\n\n---\n\n"
AUTHOR_PREFIX = "\n\n— "

# Rating histogram range (inclusive)
MIN_RATING = 1
MAX_RATING = 10

# Survey type assigned to access-key lookups
KEY_LOOKUP_SURVEY_TYPE = "Convidados"

# Logging
LOG_LEVEL = os.getenv("TRIPEVAL_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = os.getenv("TRIPEVAL_LOG_FILE", "tripeval.log")
