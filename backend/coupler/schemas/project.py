"""Project Schemas."""

from pydantic import BaseModel, Field

from coupler.core.entities import Project


class ProjectPayload(BaseModel):
    """Project fields as submitted; `id` is only set when rewriting an existing project."""
    id: str | None = Field(None, max_length=36)
    description: str
    compensation: str = Field(max_length=200)
    duration: str = Field(max_length=200)
    recommendations: list[str] = Field(default_factory=list)


class ProjectResponse(BaseModel):
    id: str
    description: str
    compensation: str
    duration: str
    company_id: str
    recommendations: list[str]

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            description=project.description,
            compensation=project.compensation,
            duration=project.duration,
            company_id=project.company_id,
            recommendations=project.recommendations,
        )
