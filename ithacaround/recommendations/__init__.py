"""
Recommendation engine.

Responsibilities:
- Score each venue against a user's preference profile.
- Rank the catalog by descending score, keeping catalog order on ties.
- Cache rankings per (catalog version, profile) for repeat calls.
"""
