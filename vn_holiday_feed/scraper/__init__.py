"""Scraping and date normalization for the holiday listing pages."""
