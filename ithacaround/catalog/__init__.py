"""
Venue catalog.

Responsibilities:
- Define the Venue model and its closed tag enumerations.
- Load and validate a catalog from CSV or in-memory records, failing fast.
- Serve one immutable snapshot per session, swapped wholesale on reload.
"""
