"""
Search & filter over the catalog: category equality plus case-insensitive text match.
"""
