"""Core planning logic.

Subpackages:
- shopping: building grocery lists from planned meals
- scheduling: week-window and month-grid date helpers
"""
__all__ = ["shopping", "scheduling"]
