"""
Workflows Package - Studio orchestration

Contains the orchestrator that drives the studio agents for each mode.
"""

from .orchestrator import StudioOrchestrator, split_batch_prompts

__all__ = [
    "StudioOrchestrator",
    "split_batch_prompts",
]
