# =============================================================================
# agents/ - AI Agent Definitions
# =============================================================================
# - task_generator.py: Generates task ideas from HackerNews trends (OpenAI)
#
# Prompts:
# - prompts/task_generator.py: System prompt and prompt builders
#
# Schemas for the generator's output live in core.models.generation.
# =============================================================================

from agents.task_generator import GenerationError, TaskGeneratorAgent

__all__ = [
    "GenerationError",
    "TaskGeneratorAgent",
]
