"""API routes package"""

from app.api import content, jobs, outputs, transformations, research, system

__all__ = ["content", "jobs", "outputs", "transformations", "research", "system"]
