"""Listing scraper: images, title, price and text from real-estate listing pages."""

__version__ = "1.0.0"
