from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, Optional


class BaseGolfModel(BaseModel):
    """Shared configuration for every engine model. Assignments are validated."""
    model_config = ConfigDict(validate_assignment=True)

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Set a field from player input. Returns the validation message instead of raising."""
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return e.errors()[0]['msg']

    def revised(self, **changes: Any):
        """Validated copy with `changes` applied (model_copy skips validation)."""
        return self.model_validate({**self.model_dump(), **changes})
