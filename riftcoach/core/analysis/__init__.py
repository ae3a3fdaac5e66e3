"""Post-match mistake analysis.

Pipeline:
1. Zone and phase classification of positions and timestamps
2. Four detectors (deaths, CS, vision, objectives)
3. Category scores (resource 20%, map control 15%, positioning 30%,
   objective 15%, trading 20%) plus a win bonus
4. At most five prioritized coaching tips
"""

from riftcoach.core.analysis.errors import AnalysisError, ParticipantNotFoundError
from riftcoach.core.analysis.orchestrator import analyze_match
from riftcoach.core.analysis.phases import format_game_time, game_phase
from riftcoach.core.analysis.recommendations import generate_coaching_tips
from riftcoach.core.analysis.scoring import calculate_scores
from riftcoach.core.analysis.zones import classify_zone

__all__ = [
    "AnalysisError",
    "ParticipantNotFoundError",
    "analyze_match",
    "calculate_scores",
    "classify_zone",
    "format_game_time",
    "game_phase",
    "generate_coaching_tips",
]
