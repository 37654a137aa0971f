# =============================================================================
# core/models/base.py - Shared Model Base
# =============================================================================
# Records are stored and served with camelCase JSON keys ("totalPoints",
# "completedAt"), while Python code uses snake_case attributes.
# CamelModel bridges the two: it accepts either spelling on input and
# dumps camelCase for storage and responses.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every stored record and API payload.

    Example:
        entry = LeaderboardEntry(user_id="u1", total_points=900, ...)
        entry.to_record()  # {"userId": "u1", "totalPoints": 900, ...}
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_record(self) -> dict[str, Any]:
        """Dump as a JSON-ready camelCase dict, dropping unset optionals."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
