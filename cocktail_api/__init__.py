# cocktail_api/__init__.py

"""Cocktail API: access token lifecycle service."""

__version__ = "1.0.0"
