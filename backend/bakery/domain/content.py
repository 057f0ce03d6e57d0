"""
Site content sections and admin settings

Both are free-form JSON documents keyed by name; updates merge into the
stored document.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from bakery.domain.base import DomainModel


class ContentSection(DomainModel):
    section: str
    data: Dict[str, Any] = Field(default_factory=dict)
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


class AdminSetting(DomainModel):
    key: str
    value: Dict[str, Any] = Field(default_factory=dict)
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None
