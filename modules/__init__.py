"""Allocation logic for the Wing Planner application (pure functions, no I/O)."""

__all__ = [
    "arithmetic",
    "assignment_validator",
    "legacy_migrator",
    "preset_allocator",
    "quantity_translator",
    "summary_aggregator",
]
