"""
Shared request/response building blocks
"""

import math
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, model_validator


class BlankAsMissingModel(BaseModel):
    """
    Request body where an empty or whitespace-only string means "not supplied".

    Admin forms post "" for untouched optional inputs; dropping those keys
    before validation lets optional fields fall back to their defaults and
    keeps partial updates from clearing stored values.
    """

    @model_validator(mode="before")
    @classmethod
    def drop_blank_strings(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value for key, value in data.items()
                if not (isinstance(value, str) and not value.strip())
            }
        return data


class AccountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


def build_pagination(page: int, limit: int, total: int) -> Dict[str, int]:
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        totalPages=math.ceil(total / limit) if limit else 0,
    ).model_dump()
