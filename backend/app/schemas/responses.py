from pydantic import BaseModel, Field

from skills.milestone_scheduler import Milestone, TimelineLayout


class TimelineResponse(BaseModel):
    project_id: str
    project_name: str
    milestones: list[Milestone] = Field(default_factory=list)
    layout: TimelineLayout = Field(description="Geometria para renderizar el timeline")
