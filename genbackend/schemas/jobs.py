from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from genbackend.core.workflow import GenerationStage


class GenerateRequest(BaseModel):
    prompt: str = Field(..., examples=["Create a movie database API with search and ratings"])
    model: Optional[str] = Field(None, examples=["gpt-4o"])
    identity: Optional[str] = None


class GenerationResponse(BaseModel):
    id: str
    prompt: str
    model: Optional[str] = None
    identity: Optional[str] = None
    stage: GenerationStage
    status: str
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    backend_id: Optional[str] = None
    backend_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
