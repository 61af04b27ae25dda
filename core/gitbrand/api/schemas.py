"""Pydantic models for API request/response schemas."""

from typing import Literal, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class CommandSchema(BaseModel):
    verb: str
    args: dict


class PendingActionSchema(BaseModel):
    """An action awaiting confirmation."""

    command: CommandSchema
    raw_text: str
    turn_index: int
    status: str
    timestamp: str


class TurnSchema(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    """Chat message request."""

    message: str


class ChatResponse(BaseModel):
    """Chat message response."""

    turn_index: int
    content: str
    role: str = "assistant"
    pending_action: Optional[PendingActionSchema] = None
    dropped_action: Optional[PendingActionSchema] = None


class ActionResultSchema(BaseModel):
    status: Literal["success", "error"]
    success: bool
    command: CommandSchema
    message: str
    error: Optional[str] = None
    refreshed_repositories: bool = False


class ConfirmResponse(BaseModel):
    executed: bool
    result: Optional[ActionResultSchema] = None


class HistoryResponse(BaseModel):
    turns: list[TurnSchema]
    pending_action: Optional[PendingActionSchema] = None


class RepositorySchema(BaseModel):
    name: str
    description: Optional[str] = None
    stars: int = 0
    forks: int = 0
    language: Optional[str] = None
    url: Optional[str] = None
    id: Optional[int] = None


class ScoreResponse(BaseModel):
    score: Optional[int] = None
    grade: str
    flags: list[str]


class GenerationRequest(BaseModel):
    """Narrative or social post request."""

    instructions: str = ""
    post_type: Literal["engine", "logic", "release"] = "engine"


class GenerationResponse(BaseModel):
    content: str


class ReadmeCommitRequest(BaseModel):
    content: str
    message: Optional[str] = None


class ProfileSchema(BaseModel):
    login: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None


class SettingsUpdateRequest(BaseModel):
    """Partial settings update; omitted fields are left alone."""

    gh_token: Optional[str] = None
    gh_account: Optional[str] = None
    llm_provider: Optional[Literal["groq", "gemini"]] = None
    llm_api_key: Optional[str] = None


class SuccessResponse(BaseModel):
    """Generic success response."""

    success: bool
    message: Optional[str] = None
