"""
Brewery recommendation engine.

Responsibilities:
- Drop breweries the user already holds a stamp for.
- Score the remaining breweries by flavor overlap with the user's preferences.
- Return up to three breweries with a short, explainable reason.
"""
