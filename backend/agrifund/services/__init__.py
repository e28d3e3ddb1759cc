# backend/agrifund/services/__init__.py
from .cleanup import cleanup_service
from .funding import funding_service
from .review import review_service

__all__ = ["cleanup_service", "funding_service", "review_service"]
