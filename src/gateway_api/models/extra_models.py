# coding: utf-8

from typing import List

from pydantic import BaseModel, Field


class TokenModel(BaseModel):
    """Bearer token claims used for role checks and default user ids."""

    sub: str
    roles: List[str] = Field(default_factory=list)
