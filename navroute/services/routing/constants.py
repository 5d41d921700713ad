"""Route generation tuning constants.

Empirically chosen values; changing any of them changes generated routes.
"""

# --- Shared ---
MIN_WAYPOINT_SPACING_NM = 10.0  # consecutive waypoints closer than this are dropped

# --- VFR corridor search ---
DETOUR_TOLERANCE_FRACTION = 0.5  # of max_segment_nm
MIN_DETOUR_TOLERANCE_NM = 20.0
NAVAID_TYPE_SCORE_FACTOR = 5.0  # score = type_weight * factor - distance_nm
NAVAID_TYPE_WEIGHTS: dict[str, int] = {
    "VORTAC": 4,
    "VOR-DME": 3,
    "VOR": 2,
    "NDB": 1,
    "FIX": 0,
    "GPS": 0,
}

# --- IFR airway pathfinder ---
TRANSITION_PENALTY_NM = 20.0  # added when a path changes airway
SEED_SEARCH_RADIUS_NM = 100.0
SEED_FALLBACK_MAX_NM = 150.0  # closest-fix fallback acceptance radius
MAX_SEEDS_PER_SIDE = 5

# --- Strategies ---
TERRAIN_MAX_SEGMENT_NM = 25.0
