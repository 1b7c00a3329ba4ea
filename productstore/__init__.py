"""Product catalog API.

REST service for a product catalog with filtering, pagination, ownership
checks and AI-generated listings.
"""

__version__ = "0.1.0"
