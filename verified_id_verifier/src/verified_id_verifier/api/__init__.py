"""API layer - FastAPI application and endpoints"""

from verified_id_verifier.api.app import app, create_app

__all__ = ["app", "create_app"]
