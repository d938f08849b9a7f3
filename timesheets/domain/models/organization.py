"""
Organization domain model.
The tenant boundary: every other entity carries an org_id.
"""

from dataclasses import dataclass

from timesheets.domain.models.base import BaseEntity, ValidationError


@dataclass(eq=False)
class Organization(BaseEntity):
    """A tenant. Immutable once created."""

    name: str = ""

    def __post_init__(self):
        super().__post_init__()
        self.name = (self.name or "").strip()
        self.validate()

    def validate(self) -> None:
        if len(self.name) < 2:
            raise ValidationError("Organization name must be at least 2 characters", "name")
