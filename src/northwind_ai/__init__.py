"""
Northwind AI API.

Northwind sample data served over FastAPI, with OpenRouter-generated recipes.
"""

__version__ = "1.0.0"
