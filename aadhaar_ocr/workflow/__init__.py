"""
Registration workflow tracking.
"""

from .tracker import WorkflowTracker

__all__ = ["WorkflowTracker"]
