"""
Recommender package
Intent extraction, lookup tables, scoring and ranking for the recommendation API.
"""
