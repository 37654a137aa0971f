# =============================================================================
# agents/task_generator.py - Task Idea Generator Agent
# =============================================================================
# Turns current HackerNews trends into ideas for new one-minute tasks.
#
# Flow:
# 1. Gather context (trending keywords and inspiration from HackerNews)
# 2. Ask OpenAI for a JSON object (JSON mode)
# 3. Validate the reply with the pydantic schemas in core.models.generation
#
# Usage:
#   from agents.task_generator import TaskGeneratorAgent
#   agent = TaskGeneratorAgent()
#   batch = await agent.generate_task_ideas()
# =============================================================================

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from app.config import settings
from agents.prompts.task_generator import (
    TASK_GENERATOR_SYSTEM_PROMPT,
    build_batch_prompt,
    build_enhance_prompt,
    build_focused_prompt,
)
from core.models import (
    AITaskBatch,
    AITaskIdea,
    FormattedTaskIdea,
    TaskEnhancement,
    TaskIdeaStatus,
)
from lib.hackernews import get_project_inspiration, get_trending_technologies
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


# =============================================================================
# Exceptions
# =============================================================================

class GenerationError(ApplicationError):
    """
    Error during task idea generation.

    Codes:
        OPENAI_ERROR: The API call itself failed
        INVALID_JSON: The reply was not a JSON object
        INVALID_SCHEMA: The JSON didn't match the expected schema
    """

    def __init__(self, message: str, code: str = "GENERATION_ERROR", **kwargs: Any):
        super().__init__(message, code=code, **kwargs)


# =============================================================================
# Generator Agent
# =============================================================================

class TaskGeneratorAgent:
    """
    Generates task ideas from current tech trends.

    Example:
        agent = TaskGeneratorAgent()

        batch = await agent.generate_task_ideas()
        print(batch.trend_summary)

        idea = await agent.generate_focused_task_idea("webassembly")
        print(idea.title)

    Attributes:
        model: OpenAI model to use (default from settings)
        temperature: Generation temperature (default from settings)
    """

    def __init__(
        self,
        model: str | None = None,
        temperature: float | None = None,
    ):
        self.client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        self.model = model or settings.OPENAI_MODEL
        self.temperature = temperature if temperature is not None else settings.GENERATOR_TEMPERATURE

        logger.info(f"TaskGeneratorAgent initialized with model={self.model}, temp={self.temperature}")

    # -------------------------------------------------------------------------
    # Public Operations
    # -------------------------------------------------------------------------

    async def generate_task_ideas(self) -> AITaskBatch:
        """
        Generate 3-6 task ideas from what is trending on HackerNews right now.

        Raises:
            GenerationError: If the model call or its output is invalid
        """
        inspirations, trending = await asyncio.gather(
            get_project_inspiration(20),
            get_trending_technologies(),
        )
        inspiration_lines = [
            f"{i.title} ({i.inspiration_type}) - {i.summary}" for i in inspirations[:10]
        ]
        logger.info(
            f"Generating task ideas from {len(trending)} trends and {len(inspirations)} stories"
        )

        data = await self._complete_json(build_batch_prompt(trending, inspiration_lines))
        batch = self._validate(AITaskBatch, data)

        logger.info(f"Generated {len(batch.tasks)} task ideas")
        return batch

    async def generate_focused_task_idea(
        self,
        trend: str,
        inspiration_title: str | None = None,
    ) -> AITaskIdea:
        """
        Generate one idea for a specific trend.

        Args:
            trend: Technology or topic to build the task around
            inspiration_title: Optional HackerNews story title to draw on
        """
        logger.info(f"Generating focused task idea for trend '{trend}'")
        data = await self._complete_json(build_focused_prompt(trend, inspiration_title))
        return self._validate(AITaskIdea, data)

    async def enhance_task_idea(self, task_idea: AITaskIdea) -> TaskEnhancement:
        """Refine an idea and add implementation notes."""
        logger.info(f"Enhancing task idea '{task_idea.title}'")
        data = await self._complete_json(build_enhance_prompt(task_idea.to_record()))
        return self._validate(TaskEnhancement, data)

    async def get_formatted_task_ideas(self) -> list[FormattedTaskIdea]:
        """
        Generate a batch and flatten it into submittable ideas.

        The description carries the generator's metadata:
            "<description>\\n\\nCategory: <c> | Difficulty: <d> | Est. time: <t>s\\n\\nInspired by: <i>"
        """
        batch = await self.generate_task_ideas()
        return [
            FormattedTaskIdea(
                title=task.title,
                description=(
                    f"{task.description}\n\n"
                    f"Category: {task.category} | Difficulty: {task.difficulty} | "
                    f"Est. time: {task.estimated_time}s\n\n"
                    f"Inspired by: {task.inspiration}"
                ),
                status=TaskIdeaStatus.PENDING,
            )
            for task in batch.tasks
        ]

    # -------------------------------------------------------------------------
    # Model Calls
    # -------------------------------------------------------------------------

    async def _complete_json(self, prompt: str) -> dict[str, Any]:
        """
        Run one JSON-mode completion and parse the reply.

        Raises:
            GenerationError: OPENAI_ERROR or INVALID_JSON
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                response_format={"type": "json_object"},  # Force JSON output
                messages=[
                    {"role": "system", "content": TASK_GENERATOR_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
            response_text = response.choices[0].message.content or ""
            logger.debug(f"OpenAI response: {response_text[:200]}...")

        except Exception as e:
            raise GenerationError(
                message=f"OpenAI API call failed: {e}",
                code="OPENAI_ERROR",
                suggestion="Check your OPENAI_API_KEY and network connection",
                details={"model": self.model},
            ) from e

        try:
            data = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise GenerationError(
                message=f"Invalid JSON response from model: {e}",
                code="INVALID_JSON",
                suggestion="Retry the request; the model didn't return valid JSON",
                details={"raw_response": response_text[:500]},
            ) from e

        if not isinstance(data, dict):
            raise GenerationError(
                message="Model returned JSON that is not an object",
                code="INVALID_JSON",
                suggestion="Retry the request",
                details={"raw_response": response_text[:500]},
            )
        return data

    @staticmethod
    def _validate(schema: type[SchemaT], data: dict[str, Any]) -> SchemaT:
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            errors = [f"{err['loc']}: {err['msg']}" for err in e.errors()]
            raise GenerationError(
                message=f"Invalid {schema.__name__} structure: {'; '.join(errors)}",
                code="INVALID_SCHEMA",
                suggestion="The model's response was valid JSON but didn't match the schema. Retry the request.",
                details={"validation_errors": errors},
            ) from e
