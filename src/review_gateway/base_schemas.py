from typing import Any

from pydantic import BaseModel, ConfigDict


class BaseJSONModel(BaseModel):
    """
    Base Pydantic model for request and response bodies.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Plain dict for an ORJSONResponse, omitting unset optional fields."""
        return self.model_dump(exclude_none=True)
