"""
Audit log entity model.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class Activity(Base, table=True):
    """Administrative action recorded for auditing.

    Table: activities
    """

    __tablename__ = "activities"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    action: str = Field(max_length=64, index=True)
    details: str = Field(default="{}", sa_type=Text, description="JSON object with action details")

    created_at: datetime = Field(default_factory=utc_now, index=True)

    def get_details_dict(self) -> Dict[str, Any]:
        """Get details as a dictionary."""
        try:
            return json.loads(self.details) if self.details else {}
        except (json.JSONDecodeError, TypeError):
            return {}

    def set_details_dict(self, details: Dict[str, Any]) -> None:
        """Set details from a dictionary."""
        self.details = json.dumps(details, default=str)
