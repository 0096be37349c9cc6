"""LangGraph request routing for the calendar skill."""

from .graph import skill_graph, run_skill, create_skill_graph
from .services import SkillServices
from .state import SessionState, SkillState, create_initial_state

__all__ = [
    "skill_graph",
    "run_skill",
    "create_skill_graph",
    "SkillServices",
    "SessionState",
    "SkillState",
    "create_initial_state"
]
