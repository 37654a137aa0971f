# =============================================================================
# agents/prompts/ - System Prompts for AI Agents
# =============================================================================
# - task_generator.py: Prompts for the task idea generator
#
# Organized with XML tags for clear structure.
# =============================================================================

from agents.prompts.task_generator import (
    TASK_GENERATOR_SYSTEM_PROMPT,
    build_batch_prompt,
    build_enhance_prompt,
    build_focused_prompt,
)

__all__ = [
    "TASK_GENERATOR_SYSTEM_PROMPT",
    "build_batch_prompt",
    "build_enhance_prompt",
    "build_focused_prompt",
]
