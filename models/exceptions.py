class GolfEngineError(Exception):
    """Base for all scoring engine errors."""


class InvalidStatusTransition(GolfEngineError):
    """Settlement status change not allowed (e.g. paid -> forgiven)."""


class WolfDecisionError(GolfEngineError):
    """Wolf decision is illegal or conflicts with one already recorded."""
