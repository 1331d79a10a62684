"""Dataclasses for service code generation."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class NodeModule:
    """A node rendered as a Python module."""
    name: str  # Node name as it appears in the backend model
    module: str  # Python module name under app/nodes
    class_name: str


@dataclass
class WorkflowModule:
    """A workflow rendered as a Python module."""
    name: str
    module: str  # Python module name under app/workflows


@dataclass
class RouteSpec:
    """An endpoint rendered as a FastAPI route."""
    path: str
    method: str  # Lower-case FastAPI decorator name
    handler: str
    description: str
    status_code: int
    workflow: Optional[str]  # Workflow name serving the route, if any


@dataclass
class GeneratedFile:
    """Represents a generated file."""
    path: str  # Relative path from output directory
    content: str  # File contents
