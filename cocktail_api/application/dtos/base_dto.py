# cocktail_api/application/dtos/base_dto.py

"""
Base class for the application DTOs.

CustomBaseModel extends the Pydantic BaseModel with behaviour shared by
every DTO of the application.
"""

from pydantic import BaseModel
from typing import Any, Dict


class CustomBaseModel(BaseModel):
    """
    Custom base model for all application DTOs.

    Fields without a value are left out of the serialized output.
    """

    def model_dump(self, *args, **kwargs) -> Dict[str, Any]:
        d = super().model_dump(*args, **kwargs)
        return {k: v for k, v in d.items() if v is not None}
