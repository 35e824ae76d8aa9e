"""
User preference profile.

Responsibilities:
- Model the taste and constraint settings used to rank venues.
- Load the persisted profile, falling back to defaults on missing or bad data.
- Apply changes through explicit setters and persist on every mutation.
"""
