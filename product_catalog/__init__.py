"""Product Catalog service.

SKU-keyed product catalog with merge-patch updates and pagination,
served over FastAPI.
"""

__version__ = "1.0.0"
