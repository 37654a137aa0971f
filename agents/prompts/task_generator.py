# =============================================================================
# agents/prompts/task_generator.py - Task Generator Prompts
# =============================================================================
# Prompts for the task idea generator. Each builder returns the user message;
# TASK_GENERATOR_SYSTEM_PROMPT is sent as the system message on every call.
#
# The model runs in JSON mode, so every prompt spells out the exact JSON
# shape expected back (camelCase keys, matching core.models.generation).
# =============================================================================

from __future__ import annotations

import json

# =============================================================================
# Shared Pieces
# =============================================================================

TASK_GENERATOR_SYSTEM_PROMPT = """
<role>
You are a creative task designer for AI Ships, a platform where users complete
fun interactive tasks in under 1 minute. You always answer with a single JSON
object and nothing else.
</role>

<task_rules>
- Completable in 30-90 seconds
- Clear, achievable goal with immediate visual feedback
- Fun, shareable and works well on mobile devices
- Feels modern and relevant to current tech discussions
</task_rules>

<categories>
- game: quick reflex, memory, pattern matching, simple arcade-style
- puzzle: logic, math, coding challenges, brain teasers
- tool: interactive utilities, generators, converters, mini-apps
</categories>
""".strip()

TASK_IDEA_SCHEMA = """{
  "title": "catchy title, 10-100 characters",
  "description": "what the user will do and achieve, 50-300 characters",
  "category": "game" | "puzzle" | "tool",
  "difficulty": "easy" | "medium" | "hard",
  "estimatedTime": integer seconds between 30 and 90,
  "keywords": 2 to 5 technology or topic keywords,
  "inspiration": "the trend or story that inspired the task",
  "interactionType": "click" | "drag" | "type" | "select" | "draw" | "swipe" | "scroll",
  "goalType": "score" | "completion" | "accuracy" | "speed" | "creativity"
}"""

GOOD_EXAMPLES = """
- "Trending Color Palette Generator" (inspired by design discussions)
- "Code Golf Challenge" (inspired by programming posts)
- "AI Prompt Battle" (inspired by AI/ML trends)
- "Tech Stack Builder" (inspired by framework discussions)
""".strip()


# =============================================================================
# Prompt Builders
# =============================================================================

def build_batch_prompt(trending: list[str], inspirations: list[str]) -> str:
    """
    Ask for 3-6 ideas based on current trends.

    Args:
        trending: Trending technology keywords
        inspirations: One line per story ("title (type) - summary")
    """
    trend_context = ", ".join(trending[:10]) or "none available"
    inspiration_context = "\n".join(inspirations[:10]) or "none available"

    return f"""
<current_trends>
{trend_context}
</current_trends>

<recent_hackernews_inspiration>
{inspiration_context}
</recent_hackernews_inspiration>

<good_examples>
{GOOD_EXAMPLES}
</good_examples>

Create 3 to 6 engaging, interactive task ideas inspired by these trends.

<output_format>
{{
  "tasks": [ {TASK_IDEA_SCHEMA} ],
  "trendSummary": "summary of the trends that inspired these tasks",
  "reasoning": "why these tasks would be engaging right now"
}}
</output_format>
""".strip()


def build_focused_prompt(trend: str, inspiration_title: str | None = None) -> str:
    story = f' and the HackerNews story: "{inspiration_title}"' if inspiration_title else ""

    return f"""
Create a single engaging interactive task inspired by the tech trend: "{trend}"{story}.
Focus on something that showcases the trend in an interactive, playable way.

<output_format>
{TASK_IDEA_SCHEMA}
</output_format>
""".strip()


def build_enhance_prompt(task_idea: dict) -> str:
    return f"""
Review and enhance this task idea for implementation:

<task>
{json.dumps(task_idea, indent=2)}
</task>

1. Refine the title and description for maximum engagement
2. Make sure it is achievable within the time limit
3. Add specific implementation guidance
4. Identify required UI components and interactions

<output_format>
{{
  "enhanced": {TASK_IDEA_SCHEMA},
  "implementationNotes": "notes for the developer implementing this task",
  "technicalRequirements": ["UI elements, libraries and other components needed"]
}}
</output_format>
""".strip()
