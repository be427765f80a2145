"""Authenticated identity."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class TokenUser:
    """Verified identity extracted from a bearer token."""

    id: UUID
    email: str
    display_name: Optional[str] = None
