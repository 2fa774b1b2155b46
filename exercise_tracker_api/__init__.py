"""
Top‑level package for the Exercise Tracker API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
