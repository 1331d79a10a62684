"""Projection of a BackendModel into an OpenAPI 3.0 document."""
import logging
from typing import Any, Dict, List, Optional
import yaml
from genbackend.schemas.backend import BackendModel, Endpoint, Parameter, Response

log = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"
API_PREFIX = "/api"
DEFAULT_RESPONSES = {"200": {"description": "Successful operation"}}


def normalize_path(path: str) -> str:
    """Strip a leading /api segment and ensure the path starts with /."""
    if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
        path = path[len(API_PREFIX):]
    if not path.startswith("/"):
        path = "/" + path
    return path


def convert_parameter(param: Parameter) -> Dict[str, Any]:
    """Convert a non-body parameter to an OpenAPI parameter object."""
    return {
        "name": param.name,
        "in": param.location,
        "description": param.description,
        # OpenAPI requires path parameters to be required
        "required": True if param.location == "path" else param.required,
        "schema": {"type": param.type},
    }


def convert_response(response: Response) -> Dict[str, Any]:
    result: Dict[str, Any] = {"description": response.description}
    if response.schema_:
        result["content"] = {
            "application/json": {
                "schema": response.schema_
            }
        }
    return result


def _merge_body_parameters(body_params: List[Parameter]) -> Optional[Dict[str, Any]]:
    """
    Merge every body parameter into one requestBody.

    The first body parameter decides `required` and `description`; later
    ones only contribute properties to the schema.
    """
    if not body_params:
        return None
    first = body_params[0]
    properties: Dict[str, Any] = {}
    for param in body_params:
        properties.setdefault(param.name, {"type": param.type, "description": param.description})
    return {
        "description": first.description,
        "required": first.required,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "properties": properties,
                }
            }
        },
    }


def build_operation(endpoint: Endpoint) -> Dict[str, Any]:
    operation: Dict[str, Any] = {
        "summary": endpoint.description,
        "description": endpoint.description,
    }

    body_params = [p for p in endpoint.parameters if p.location == "body"]
    other_params = [p for p in endpoint.parameters if p.location != "body"]
    if other_params:
        operation["parameters"] = [convert_parameter(p) for p in other_params]
    request_body = _merge_body_parameters(body_params)
    if request_body:
        operation["requestBody"] = request_body

    if endpoint.responses:
        operation["responses"] = {str(r.status): convert_response(r) for r in endpoint.responses}
    else:
        operation["responses"] = dict(DEFAULT_RESPONSES)
    return operation


def _add_operation(paths: Dict[str, Any], endpoint: Endpoint) -> None:
    """Register an operation; same path and method overwrites the earlier entry."""
    path = normalize_path(endpoint.path)
    method = endpoint.method.lower()
    if path in paths and method in paths[path]:
        log.debug("Overwriting %s %s with a later endpoint", method.upper(), path)
    paths.setdefault(path, {})[method] = build_operation(endpoint)


def minimal_spec(model: Any) -> Dict[str, Any]:
    """Smallest valid document, used when projection fails."""
    title = getattr(model, "name", None) or "Generated API"
    version = getattr(model, "version", None) or "0.1.0"
    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": title,
            "description": "Error generating complete specification",
            "version": version,
        },
        "servers": [{"url": API_PREFIX}],
        "paths": {},
    }


def project(model: BackendModel) -> Dict[str, Any]:
    """
    Project a backend model into an OpenAPI document.

    Never raises: an internal failure degrades to a minimal valid document
    so documentation serving is never blocked.
    """
    try:
        paths: Dict[str, Any] = {}
        for endpoint in model.endpoints:
            _add_operation(paths, endpoint)

        spec = {
            "openapi": OPENAPI_VERSION,
            "info": {
                "title": model.name,
                "description": model.description,
                "version": model.version,
            },
            "servers": [{"url": API_PREFIX}],
            "paths": paths,
            "components": {
                "schemas": {}
            },
        }
        log.info("Generated OpenAPI spec: %d endpoints, %d paths", model.endpoint_count, len(paths))
        return spec
    except Exception as e:
        log.exception("Error generating OpenAPI spec: %s", e)
        return minimal_spec(model)


def dump_yaml(spec: Dict[str, Any]) -> str:
    return yaml.dump(spec, default_flow_style=False, sort_keys=False, allow_unicode=True)
