"""Pydantic models for the generated backend representation."""
import re
import uuid
from typing import Annotated, Any, Dict, Literal, Optional, Tuple
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")

DEFAULT_VERSION = "0.1.0"

_EXPRESS_PARAM = re.compile(r"/:([A-Za-z_][A-Za-z0-9_]*)")


def _lower(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def _empty_if_none(value: Any) -> Any:
    return "" if value is None else value


NodeType = Annotated[
    Literal["data-processor", "validator", "external-api", "database", "transformer"],
    BeforeValidator(_lower),
]
SemanticType = Annotated[Literal["string", "number", "boolean", "object"], BeforeValidator(_lower)]
ParameterLocation = Annotated[Literal["path", "query", "body", "header"], BeforeValidator(_lower)]
Description = Annotated[str, BeforeValidator(_empty_if_none)]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class IOField(_Frozen):
    """A typed node input or output."""
    name: str = Field(..., min_length=1)
    type: SemanticType = "string"
    description: Description = ""


class Node(_Frozen):
    name: str = Field(..., min_length=1)
    type: NodeType
    description: Description = ""
    inputs: Tuple[IOField, ...] = ()
    outputs: Tuple[IOField, ...] = ()


class Parameter(_Frozen):
    name: str = Field(..., min_length=1)
    location: ParameterLocation = Field(..., alias="in")
    required: bool = False
    type: SemanticType = "string"
    description: Description = ""


class Response(_Frozen):
    status: int
    description: Description = ""
    schema_: Optional[Dict[str, Any]] = Field(default=None, alias="schema")


class Endpoint(_Frozen):
    path: str
    method: Literal["GET", "POST", "PUT", "DELETE"]
    description: Description = ""
    parameters: Tuple[Parameter, ...] = ()
    responses: Tuple[Response, ...] = ()

    @field_validator("path", mode="before")
    @classmethod
    def _normalize_path(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        path = value.strip()
        if not path:
            raise ValueError("endpoint path must not be empty")
        if not path.startswith("/"):
            path = "/" + path
        # Express-style /:id becomes /{id}
        return _EXPRESS_PARAM.sub(r"/{\1}", path)

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_method(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


class Workflow(_Frozen):
    name: str = Field(..., min_length=1)
    description: Description = ""
    nodes: Tuple[str, ...] = ()
    endpoints: Tuple[Endpoint, ...] = ()


class BackendModel(_Frozen):
    """Canonical, validated representation of a generated service.

    Instances are immutable. A regeneration produces a new instance; the
    counts below are derived from the collections and never stored.
    """
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = Field(..., min_length=1)
    description: Description = ""
    version: str = DEFAULT_VERSION
    nodes: Tuple[Node, ...] = ()
    workflows: Tuple[Workflow, ...] = ()
    endpoints: Tuple[Endpoint, ...] = ()

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("version", mode="before")
    @classmethod
    def _default_version(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_VERSION
        return value

    @model_validator(mode="after")
    def _check_references(self) -> "BackendModel":
        known = {node.name for node in self.nodes}
        for workflow in self.workflows:
            for ref in workflow.nodes:
                if ref not in known:
                    raise ValueError(f"workflow '{workflow.name}' references unknown node '{ref}'")
        return self

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def workflow_count(self) -> int:
        return len(self.workflows)

    @property
    def endpoint_count(self) -> int:
        return len(self.endpoints)

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
