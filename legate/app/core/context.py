from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    """Identity of the caller, passed explicitly into the service layer."""

    user_id: UUID
