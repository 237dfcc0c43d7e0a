"""Service-level response schemas (analysis payloads live in ``polai.analysis.models``)."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name and version")
    environment: str = Field(..., description="Current environment")
    ai_provider: str = Field(..., description="Configured primary analysis provider")
    mistral_configured: bool = Field(..., description="Whether a Mistral API key is set")
    openai_configured: bool = Field(..., description="Whether an OpenAI API key is set")
    endpoints: dict[str, str] = Field(default_factory=dict, description="Analysis endpoints")
    timestamp: str = Field(..., description="ISO 8601 response time")


class ServiceInfoResponse(BaseModel):
    message: str = Field(..., description="Welcome message")
    version: str = Field(..., description="Service version")
    ai_provider: str = Field(..., description="Configured primary analysis provider")
    endpoints: dict[str, str] = Field(default_factory=dict, description="Analysis endpoints")
