"""
Service layer.

Each service wraps one table of the database handle it is constructed
with; the date helpers in ``dates`` hold the defaulting rules for
caller‑supplied dates.
"""
