"""Error types raised at the meal-plan boundary."""


class InvalidInputError(ValueError):
    """Caller supplied a malformed date, an unknown meal type or similar bad input."""
