"""
Web module.

Flask server hosting the SparkDeck showcase page and JSON API.
"""
