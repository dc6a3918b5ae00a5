"""
Configuration Module for Menu Matcher
=====================================

This module centralizes the configuration settings and environment variables
used by the matching engine, the catalog supplier and the command line.

Configuration Categories:
-------------------------
- **Menu Data**: Where restaurant menu JSON files are read from.

- **Match Thresholds**: Base similarity thresholds fed into the dynamic
  threshold function. Per-query adjustments (short queries, long phrases)
  are applied in code, not here.

- **Order Verification**: Offsets used when classifying special
  instructions and proposing suggestions for unmatched order lines.

Environment Variables:
----------------------
- MENU_DATA_DIR: Directory of restaurant menu JSON files (default: "menu_data")
- MATCH_BASE_THRESHOLD: Base threshold for best-match search (default: 0.4)
- FIND_ALL_BASE_THRESHOLD: Base threshold for all-match search (default: 0.5)
- LOG_LEVEL: Read by logging_config.setup_logging (default: INFO)

Usage:
------
    from menu_matcher.config import MATCH_BASE_THRESHOLD, MENU_DATA_DIR
"""

import os
from pathlib import Path


# =============================================================================
# Menu Data
# =============================================================================
# One JSON file per restaurant, named after the restaurant id.

MENU_DATA_DIR: Path = Path(os.getenv("MENU_DATA_DIR", "menu_data"))


# =============================================================================
# Match Thresholds
# =============================================================================
# Similarity scores range from 0 to 1. These bases are adjusted per query by
# matching.candidates.get_dynamic_threshold.

MATCH_BASE_THRESHOLD: float = float(os.getenv("MATCH_BASE_THRESHOLD", "0.4"))
FIND_ALL_BASE_THRESHOLD: float = float(os.getenv("FIND_ALL_BASE_THRESHOLD", "0.5"))


# =============================================================================
# Order Verification
# =============================================================================

# Added to the threshold when a line looks like a special instruction, so
# only a confident catalog match keeps it as a priced item
SPECIAL_INSTRUCTION_THRESHOLD_BOOST: float = 0.2

# Lenient threshold for suggestions: effective threshold minus the drop,
# never below the floor
SUGGESTION_THRESHOLD_DROP: float = 0.15
SUGGESTION_THRESHOLD_FLOOR: float = 0.25

# The top suggestion must beat the runner-up by more than this margin
SUGGESTION_MARGIN: float = 0.1
