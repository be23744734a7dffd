"""REST boundary for budgetit."""

from budgetit.api.app import create_app

__all__ = ["create_app"]
