"""Prompt-to-model translation through a text-generation service."""
from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional, Protocol
from genbackend.core.config import Settings
from genbackend.core.llm import ChatCompletionsClient, CompletionError
from genbackend.core.workflow import ErrorCode, GenerationError, GenerationStage, TranslationResult

log = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a senior backend architect. Break the user's request down into a backend built from small nanoservices.
Identify:
1. Nodes: single-responsibility units of logic (validation, transformation, storage, calls to external APIs).
2. Workflows: ordered sequences of nodes that fulfil a request. The node order is the execution order.
3. Endpoints: the HTTP operations each workflow exposes.

Reply with a single JSON object and nothing else, using exactly this shape:
{
  "name": "short-service-name",
  "description": "What the service does",
  "nodes": [
    {
      "name": "node-name",
      "type": "data-processor|validator|external-api|database|transformer",
      "description": "What the node does",
      "inputs": [{"name": "inputName", "type": "string|number|boolean|object", "description": "Purpose of the input"}],
      "outputs": [{"name": "outputName", "type": "string|number|boolean|object", "description": "Meaning of the output"}]
    }
  ],
  "workflows": [
    {
      "name": "workflow-name",
      "description": "What the workflow does",
      "nodes": ["node-name"],
      "endpoints": [
        {
          "path": "/api/resource",
          "method": "GET|POST|PUT|DELETE",
          "description": "What the endpoint does",
          "parameters": [
            {"name": "paramName", "in": "path|query|body|header", "required": true, "type": "string|number|boolean|object", "description": "Purpose of the parameter"}
          ],
          "responses": [
            {"status": 200, "description": "Successful response", "schema": {"type": "object", "properties": {"key": {"type": "string"}}}}
          ]
        }
      ]
    }
  ]
}
Every name listed in a workflow's "nodes" must be the name of a node defined in "nodes"."""


class CompletionClient(Protocol):
    async def complete(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float,
        max_tokens: int,
        json_mode: bool = True,
    ) -> str: ...


def _failure(code: ErrorCode, message: str, stage: GenerationStage = GenerationStage.TRANSLATE) -> TranslationResult:
    return TranslationResult(ok=False, message=message, error=GenerationError(code=code, message=message, stage=stage))


def check_inputs(prompt: Optional[str], api_key: Optional[str]) -> Optional[GenerationError]:
    """Reject an empty prompt or a missing credential before any network call."""
    if not prompt or not prompt.strip():
        return GenerationError(ErrorCode.EMPTY_PROMPT, "Empty prompt provided", GenerationStage.CHECK_INPUT)
    if not api_key or not api_key.strip():
        return GenerationError(
            ErrorCode.MISSING_CREDENTIAL,
            "A text-generation API key is required (set OPENAI_API_KEY)",
            GenerationStage.CHECK_INPUT,
        )
    return None


def build_messages(prompt: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt.strip()},
    ]


def decode_reply(content: str) -> TranslationResult:
    """Decode a completion into a raw candidate, checking the required top-level keys."""
    try:
        data: Any = json.loads(content)
    except json.JSONDecodeError as e:
        log.error("Completion is not valid JSON: %s", e, extra={"stage": GenerationStage.TRANSLATE.value})
        return _failure(ErrorCode.MALFORMED_RESPONSE, "Failed to parse the text-generation response as JSON")

    if not isinstance(data, dict) or not data.get("name") or not isinstance(data.get("workflows"), list):
        return _failure(
            ErrorCode.INVALID_SHAPE,
            "Invalid data format in text-generation response: 'name' and a 'workflows' list are required",
        )

    nodes = data.get("nodes")
    log.info(
        "Translated prompt into service '%s' (%d nodes, %d workflows)",
        data["name"],
        len(nodes) if isinstance(nodes, list) else 0,
        len(data["workflows"]),
        extra={"stage": GenerationStage.TRANSLATE.value},
    )
    return TranslationResult(ok=True, message="Successfully parsed prompt", raw=data)


async def translate(
    prompt: str,
    config: Settings,
    client: Optional[CompletionClient] = None,
    model: Optional[str] = None,
) -> TranslationResult:
    """
    Translate a natural-language prompt into a raw candidate model.

    Makes exactly one call to the text-generation service. Retrying is left
    to the caller.

    Args:
        prompt: Natural-language description of the backend
        config: Settings carrying the credential and generation parameters
        client: Optional completion client (defaults to ChatCompletionsClient)
        model: Optional model identifier overriding config.llm_model

    Returns:
        TranslationResult holding the decoded JSON object on success
    """
    error = check_inputs(prompt, config.openai_api_key)
    if error:
        return TranslationResult(ok=False, message=error.message, error=error)

    if client is None:
        client = ChatCompletionsClient(
            api_key=config.openai_api_key,
            api_base=config.llm_api_base,
            timeout=config.llm_timeout,
        )

    model_name = model or config.llm_model
    log.info("Parsing prompt with %s...", model_name, extra={"stage": GenerationStage.TRANSLATE.value})
    try:
        content = await client.complete(
            build_messages(prompt),
            model=model_name,
            temperature=config.llm_temperature,
            max_tokens=config.llm_max_tokens,
            json_mode=True,
        )
    except CompletionError as e:
        log.error("Text-generation call failed: %s", e, extra={"stage": GenerationStage.TRANSLATE.value})
        return _failure(ErrorCode.SERVICE_UNAVAILABLE, str(e))

    return decode_reply(content)
