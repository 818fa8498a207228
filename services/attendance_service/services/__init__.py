"""Attendance business logic: access tiers, office hours, time entry, listing."""
