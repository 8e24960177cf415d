"""Customer API schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class CustomerInput(BaseModel):
    name: str
    contact: Optional[str] = None
