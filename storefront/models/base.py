# storefront/models/base.py
from typing import Union
from pydantic import BaseModel, ConfigDict

EntityId = Union[int, str]

class CanonicalModel(BaseModel):
    """Base model for normalized, immutable entities"""

    model_config = ConfigDict(frozen=True)
