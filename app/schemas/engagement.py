from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional


class EngagementRow(BaseModel):
    """One event in the engagement report"""
    artist_name: str
    event_type: Optional[str] = None
    engagement_score: int
    created_at: datetime
    timezone: str

    model_config = {"from_attributes": True}


class EngagementReportResponse(BaseModel):
    """Engagement report page payload"""
    data: List[EngagementRow]
