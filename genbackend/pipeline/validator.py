"""Schema validation of raw candidates produced by the translator."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Union
from pydantic import ValidationError
from genbackend.core.workflow import ErrorCode
from genbackend.schemas.backend import BackendModel, HTTP_METHODS

log = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 5


@dataclass(frozen=True)
class Valid:
    model: BackendModel


@dataclass(frozen=True)
class Invalid:
    code: ErrorCode
    reason: str


ValidationOutcome = Union[Valid, Invalid]


def _dicts(items: Any) -> Iterator[Dict[str, Any]]:
    """Yield only the dict entries of a list (anything else is left to the schema)."""
    if isinstance(items, list):
        for item in items:
            if isinstance(item, dict):
                yield item


def _find_duplicate(names: List[Any]) -> Any:
    seen = set()
    for name in names:
        if name in seen:
            return name
        seen.add(name)
    return None


def _collect_endpoints(raw: Dict[str, Any]) -> List[Any]:
    """Top-level endpoints win when present, otherwise flatten workflow endpoints in order."""
    if isinstance(raw.get("endpoints"), list):
        return list(raw["endpoints"])
    endpoints: List[Any] = []
    for workflow in _dicts(raw.get("workflows")):
        if isinstance(workflow.get("endpoints"), list):
            endpoints.extend(workflow["endpoints"])
    return endpoints


def _check_endpoint(endpoint: Dict[str, Any]) -> str | None:
    path = endpoint.get("path")
    if not isinstance(path, str) or not path.strip():
        return "endpoint path must be a non-empty string"
    method = endpoint.get("method")
    if not isinstance(method, str) or method.strip().upper() not in HTTP_METHODS:
        return f"endpoint {path} has unsupported method {method!r} (expected one of {', '.join(HTTP_METHODS)})"
    return None


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors()[:MAX_REPORTED_ERRORS]:
        loc = ".".join(str(p) for p in error.get("loc", ()))
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    remaining = exc.error_count() - MAX_REPORTED_ERRORS
    if remaining > 0:
        parts.append(f"... and {remaining} more")
    return "; ".join(parts)


def validate_candidate(raw: Any) -> ValidationOutcome:
    """
    Validate a raw candidate against the backend model invariants.

    Args:
        raw: Decoded JSON object returned by the translator

    Returns:
        Valid with the canonical BackendModel, or Invalid with the reason.
        Never raises.
    """
    if not isinstance(raw, dict):
        return Invalid(ErrorCode.INVALID_SHAPE, "candidate must be a JSON object")
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return Invalid(ErrorCode.INVALID_SHAPE, "candidate is missing a non-empty 'name'")
    if not isinstance(raw.get("workflows"), list):
        return Invalid(ErrorCode.INVALID_SHAPE, "candidate is missing a 'workflows' list")

    nodes = list(_dicts(raw.get("nodes")))
    workflows = list(_dicts(raw.get("workflows")))

    node_names = [n["name"] for n in nodes if isinstance(n.get("name"), str)]
    duplicate = _find_duplicate(node_names)
    if duplicate is not None:
        return Invalid(ErrorCode.DUPLICATE_NAME, f"node name '{duplicate}' is used more than once")
    duplicate = _find_duplicate([w["name"] for w in workflows if isinstance(w.get("name"), str)])
    if duplicate is not None:
        return Invalid(ErrorCode.DUPLICATE_NAME, f"workflow name '{duplicate}' is used more than once")

    known_nodes = set(node_names)
    for workflow in workflows:
        refs = workflow.get("nodes") or []
        if not isinstance(refs, list):
            return Invalid(ErrorCode.INVALID_MODEL, f"workflow '{workflow.get('name')}' nodes must be a list")
        for ref in refs:
            if not isinstance(ref, str) or ref not in known_nodes:
                return Invalid(
                    ErrorCode.DANGLING_NODE_REFERENCE,
                    f"workflow '{workflow.get('name')}' references unknown node '{ref}'",
                )

    endpoints = _collect_endpoints(raw)
    nested = [e for w in workflows for e in _dicts(w.get("endpoints"))]
    for endpoint in list(_dicts(endpoints)) + nested:
        problem = _check_endpoint(endpoint)
        if problem:
            return Invalid(ErrorCode.INVALID_ENDPOINT, problem)

    candidate = {
        "name": name,
        "description": raw.get("description"),
        "version": raw.get("version"),
        "nodes": raw.get("nodes") or [],
        "workflows": raw["workflows"],
        "endpoints": endpoints,
    }
    try:
        model = BackendModel.model_validate(candidate)
    except ValidationError as e:
        log.debug("Candidate failed schema validation: %s", e)
        return Invalid(ErrorCode.INVALID_MODEL, _format_errors(e))

    return Valid(model)
