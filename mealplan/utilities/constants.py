from typing import Final, Tuple

DATE_FORMAT: Final[str] = "%Y-%m-%d"
DAYS_PER_WEEK: Final[int] = 7
# 0 = Sunday .. 6 = Saturday
MONDAY: Final[int] = 1
# slot order of a planner day
MEAL_TYPES: Final[Tuple[str, ...]] = ("breakfast", "lunch", "dinner", "snack")
MAX_EVENTS: Final[int] = 300
