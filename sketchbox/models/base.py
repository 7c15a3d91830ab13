"""Base model for all Sketchbox Pydantic models.

This module provides a base model class that enforces consistent serialization
behavior across all Sketchbox models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class SketchboxBaseModel(BaseModel):
    """Base model class for all Sketchbox Pydantic models.

    This class enforces consistent serialization behavior:
    - by_alias=True: Use field aliases for serialization
    - exclude_unset=True: Exclude fields that weren't explicitly set
    - mode="json": Use JSON-compatible serialization (e.g., Path -> str)
    """

    model_config = ConfigDict(
        # Strip whitespace from string fields
        str_strip_whitespace=True,
        # Use enum values in serialization
        use_enum_values=True,
        # Validate assignment after model creation
        validate_assignment=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary with consistent serialization parameters.

        Returns:
            Dictionary representation using JSON-compatible serialization
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
