"""PaisaWise Assistant"""
from agents.orchestrator import PaisaWiseAgent

__all__ = ["PaisaWiseAgent"]
