"""
Review Pipeline

Orchestration of the diff-to-comment review run.
"""

from .orchestrator import ReviewOrchestrator

__all__ = ['ReviewOrchestrator']
