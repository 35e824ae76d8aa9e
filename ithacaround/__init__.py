"""
Ithacaround recommendation & search engine.

Responsibilities:
- Hold the curated catalog of Ithaca venues for a session.
- Rank the catalog against a user's preference profile.
- Filter the catalog by free-text query and category.
- Track per-user favorites and preferences in a key-value store.
"""

__version__ = "1.0.0"
