"""ABC Escolar REST API."""

from escolar.presentation.api.app import create_app

__all__ = ["create_app"]
