"""
Favorites (bookmarked venue ids), kept apart from the preference profile.
"""
