"""Services package for progress aggregation and dashboard assembly."""

from progress_dashboard.services.progress import ProgressService

__all__ = ["ProgressService"]
