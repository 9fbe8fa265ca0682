"""Response schemas for the unauthenticated content routes."""

from pydantic import BaseModel


class GameInfo(BaseModel):
    title: str
    tagline: str
    description: str
    features: list[str]
    screenshots: list[str]
    trailer: str


class TeamInfo(BaseModel):
    size: str
    founded: str
    location: str


class CompanyInfo(BaseModel):
    name: str
    mission: str
    values: list[str]
    team: TeamInfo
