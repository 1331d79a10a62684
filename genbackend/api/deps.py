"""Request-scoped accessors for objects owned by the application."""
from typing import Optional
from fastapi import HTTPException, Request
from genbackend.core.config import Settings
from genbackend.core.state import ModelStore
from genbackend.pipeline.translator import CompletionClient
from genbackend.schemas.backend import BackendModel
from genbackend.tasks.jobs import GenerationRegistry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ModelStore:
    return request.app.state.store


def get_registry(request: Request) -> GenerationRegistry:
    return request.app.state.registry


def get_completion_client(request: Request) -> Optional[CompletionClient]:
    return getattr(request.app.state, "completion_client", None)


def require_model(request: Request) -> BackendModel:
    model = get_store(request).current()
    if model is None:
        raise HTTPException(status_code=404, detail="No backend generated yet")
    return model
