"""Agent that never moves. Useful for scripted tests and idle seats."""

from typing import Any, Dict

from runtime.decision import DecisionModel, pass_decision
from .base_agent import BaseAgent
from .registry import register_agent


@register_agent("pass")
class PassAgent(BaseAgent):

    def decide(self, view: Dict[str, Any]) -> DecisionModel:
        return pass_decision()
