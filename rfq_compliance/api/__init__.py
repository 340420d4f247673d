"""API modules."""

from rfq_compliance.api.app import create_app
from rfq_compliance.api.routes import router

__all__ = ["create_app", "router"]
