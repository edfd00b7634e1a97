"""LangGraph review workflow over the AIIE engine."""

from .session import ReviewSession
from .state import ReviewState
from .workflow import create_workflow, get_workflow

__all__ = [
    "ReviewSession",
    "ReviewState",
    "create_workflow",
    "get_workflow",
]
