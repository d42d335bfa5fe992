from .bestball import calculate_best_ball, create_default_teams
from .handicap import (
    build_strokes_map,
    match_play_strokes,
    playing_handicap,
    strokes_per_hole,
)
from .match_play import calculate_match_play
from .nassau import calculate_nassau
from .skins import calculate_skins
from .stableford import calculate_stableford
from .wolf import calculate_wolf, calculate_wolf_hole_result, wolf_for_hole

__all__ = [
    "calculate_best_ball",
    "create_default_teams",
    "build_strokes_map",
    "match_play_strokes",
    "playing_handicap",
    "strokes_per_hole",
    "calculate_match_play",
    "calculate_nassau",
    "calculate_skins",
    "calculate_stableford",
    "calculate_wolf",
    "calculate_wolf_hole_result",
    "wolf_for_hole",
]
