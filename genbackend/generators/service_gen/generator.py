"""Orchestrator for runnable service code generation."""
from pathlib import Path
from typing import Dict, List, Tuple
from genbackend.generators.service_gen.render import (
    render_main_py,
    render_package_init,
    render_node_module,
    render_nodes_init,
    render_workflow_module,
    render_workflows_init,
    render_routes,
    render_requirements_txt,
    render_readme,
)
from genbackend.generators.service_gen.types import GeneratedFile, NodeModule, RouteSpec, WorkflowModule
from genbackend.generators.service_gen.utils import handler_name, to_identifier, to_pascal_case, unique_name
from genbackend.generators.service_gen.writer import write_files
from genbackend.schemas.backend import BackendModel, Endpoint


def _success_status(endpoint: Endpoint) -> int:
    for response in endpoint.responses:
        if 200 <= response.status < 300:
            return response.status
    return 200


def build_routes(model: BackendModel) -> List[RouteSpec]:
    """
    Build one route per (method, path) pair.

    A later endpoint with the same method and path replaces the earlier one.
    Each route is served by the first workflow that lists the endpoint.
    """
    served_by: Dict[Tuple[str, str], str] = {}
    for workflow in model.workflows:
        for endpoint in workflow.endpoints:
            served_by.setdefault((endpoint.method, endpoint.path), workflow.name)

    unique: Dict[Tuple[str, str], Endpoint] = {}
    for endpoint in model.endpoints:
        unique[(endpoint.method, endpoint.path)] = endpoint

    routes = []
    used_handlers: set = set()
    for key, endpoint in unique.items():
        routes.append(RouteSpec(
            path=endpoint.path,
            method=endpoint.method.lower(),
            handler=unique_name(handler_name(endpoint.method, endpoint.path), used_handlers),
            description=endpoint.description,
            status_code=_success_status(endpoint),
            workflow=served_by.get(key),
        ))
    return routes


def render_service(model: BackendModel) -> List[GeneratedFile]:
    """Render every file of the generated service without touching the disk."""
    used_modules: set = set()
    node_modules = [
        NodeModule(
            name=node.name,
            module=unique_name(to_identifier(node.name), used_modules),
            class_name=f"{to_pascal_case(node.name)}Node",
        )
        for node in model.nodes
    ]
    used_classes: set = set()
    for node_module in node_modules:
        node_module.class_name = unique_name(node_module.class_name, used_classes)

    used_modules = set()
    workflow_modules = [
        WorkflowModule(
            name=workflow.name,
            module=unique_name(to_identifier(workflow.name, prefix="wf"), used_modules),
        )
        for workflow in model.workflows
    ]
    routes = build_routes(model)

    files = [
        GeneratedFile(path="app/__init__.py", content=render_package_init(f"{model.name} service.")),
        GeneratedFile(path="app/main.py", content=render_main_py(model)),
        GeneratedFile(path="app/api/__init__.py", content=render_package_init("API routes package.")),
        GeneratedFile(path="app/api/routes.py", content=render_routes(routes)),
        GeneratedFile(path="app/nodes/__init__.py", content=render_nodes_init(node_modules)),
        GeneratedFile(path="app/workflows/__init__.py", content=render_workflows_init(workflow_modules)),
        GeneratedFile(path="requirements.txt", content=render_requirements_txt()),
        GeneratedFile(path="README.md", content=render_readme(model, routes)),
    ]
    for node, node_module in zip(model.nodes, node_modules):
        files.append(GeneratedFile(
            path=f"app/nodes/{node_module.module}.py",
            content=render_node_module(node, node_module.class_name),
        ))
    for workflow, workflow_module in zip(model.workflows, workflow_modules):
        files.append(GeneratedFile(
            path=f"app/workflows/{workflow_module.module}.py",
            content=render_workflow_module(workflow),
        ))
    return files


def generate_service(model: BackendModel, out_dir: Path) -> List[GeneratedFile]:
    """
    Generate runnable FastAPI service code for a backend model.

    Args:
        model: Validated backend model
        out_dir: Output directory for generated files

    Returns:
        List of GeneratedFile objects
    """
    files = render_service(model)
    write_files(files, out_dir)
    return files
