import copy
import json
from typing import Any, Dict, List, Optional
import pytest
from genbackend.core.config import Settings

MOVIE_PROMPT = "API to list and add movies with name, description, releaseYear"

MOVIE_CANDIDATE: Dict[str, Any] = {
    "name": "movie-service",
    "description": "List and add movies",
    "nodes": [
        {
            "name": "movie-validator",
            "type": "validator",
            "description": "Validates movie payloads",
            "inputs": [
                {"name": "name", "type": "string", "description": "Movie name"},
                {"name": "releaseYear", "type": "number", "description": "Year of release"},
            ],
            "outputs": [{"name": "valid", "type": "boolean", "description": "Whether the movie is valid"}],
        },
        {
            "name": "movie-store",
            "type": "database",
            "description": "Reads and writes movies",
            "inputs": [{"name": "movie", "type": "object", "description": "Movie to store"}],
            "outputs": [{"name": "movies", "type": "object", "description": "Stored movies"}],
        },
    ],
    "workflows": [
        {
            "name": "list-movies",
            "description": "Return every movie",
            "nodes": ["movie-store"],
            "endpoints": [
                {
                    "path": "/api/movies",
                    "method": "GET",
                    "description": "List all movies",
                    "parameters": [
                        {"name": "limit", "in": "query", "required": False, "type": "number", "description": "Page size"}
                    ],
                    "responses": [{"status": 200, "description": "Movies found"}],
                }
            ],
        },
        {
            "name": "add-movie",
            "description": "Validate and store a movie",
            "nodes": ["movie-validator", "movie-store"],
            "endpoints": [
                {
                    "path": "/api/movies",
                    "method": "post",
                    "description": "Add a new movie",
                    "parameters": [
                        {"name": "name", "in": "body", "required": True, "type": "string", "description": "Movie name"},
                        {"name": "description", "in": "body", "required": False, "type": "string", "description": "Synopsis"},
                        {"name": "releaseYear", "in": "body", "required": False, "type": "number", "description": "Year"},
                    ],
                    "responses": [
                        {
                            "status": 201,
                            "description": "Movie created",
                            "schema": {"type": "object", "properties": {"id": {"type": "string"}}},
                        }
                    ],
                }
            ],
        },
    ],
}


class FakeCompletionClient:
    """Stands in for the text-generation service; records every call."""

    def __init__(self, reply: Any = None, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def complete(self, messages, model, temperature, max_tokens, json_mode=True) -> str:
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "json_mode": json_mode,
        })
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, str):
            return self.reply
        return json.dumps(self.reply)


@pytest.fixture
def movie_candidate() -> Dict[str, Any]:
    return copy.deepcopy(MOVIE_CANDIDATE)


@pytest.fixture
def fake_client():
    return FakeCompletionClient


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="test-key",
        output_dir=str(tmp_path / "generated"),
        templates_dir=str(tmp_path / "templates"),
        state_file=None,
    )


@pytest.fixture
def movie_prompt() -> str:
    return MOVIE_PROMPT
