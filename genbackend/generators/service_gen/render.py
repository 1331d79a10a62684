"""Simple string templates for generated service code (Jinja2-free)."""
from typing import List
from genbackend.generators.service_gen.types import NodeModule, RouteSpec, WorkflowModule
from genbackend.schemas.backend import BackendModel, Node, Workflow

PLACEHOLDER_VALUES = {
    "string": "",
    "number": 0,
    "boolean": False,
    "object": {},
}


def render_main_py(model: BackendModel) -> str:
    """Generate app/main.py content."""
    return "\n".join([
        "from fastapi import FastAPI",
        "from app.api.routes import router",
        "",
        f"app = FastAPI(title={model.name!r}, description={model.description!r}, version={model.version!r})",
        "app.include_router(router)",
        "",
        "",
        '@app.get("/health")',
        "def health():",
        '    return {"status": "ok"}',
        "",
    ])


def render_package_init(doc: str) -> str:
    return f'"""{doc}"""\n'


def render_node_module(node: Node, class_name: str) -> str:
    """Generate app/nodes/<node>.py content."""
    outputs = {field.name: PLACEHOLDER_VALUES[field.type] for field in node.outputs}
    inputs = [field.name for field in node.inputs]
    lines = [
        "import copy",
        "from typing import Any, Dict",
        "",
        "",
        f"class {class_name}:",
        f"    NAME = {node.name!r}",
        f"    TYPE = {node.type!r}",
        f"    DESCRIPTION = {node.description!r}",
        f"    INPUTS = {inputs!r}",
        f"    OUTPUTS = {outputs!r}",
        "",
        "    async def run(self, inputs: Dict[str, Any]) -> Dict[str, Any]:",
        "        # Placeholder behaviour: echo matching inputs, typed defaults otherwise.",
        "        return {",
        "            key: inputs.get(key, copy.deepcopy(default))",
        "            for key, default in self.OUTPUTS.items()",
        "        }",
        "",
    ]
    return "\n".join(lines)


def render_nodes_init(nodes: List[NodeModule]) -> str:
    """Generate app/nodes/__init__.py with the node registry."""
    lines = ['"""Generated nodes."""']
    for node in nodes:
        lines.append(f"from app.nodes.{node.module} import {node.class_name}")
    lines.append("")
    lines.append("NODE_REGISTRY = {")
    for node in nodes:
        lines.append(f"    {node.name!r}: {node.class_name}(),")
    lines.append("}")
    lines.append("")
    return "\n".join(lines)


def render_workflow_module(workflow: Workflow) -> str:
    """Generate app/workflows/<workflow>.py content."""
    return "\n".join([
        "from typing import Any, Dict",
        "from app.nodes import NODE_REGISTRY",
        "",
        f"NAME = {workflow.name!r}",
        f"DESCRIPTION = {workflow.description!r}",
        f"STEPS = {list(workflow.nodes)!r}",
        "",
        "",
        "async def execute(context: Dict[str, Any]) -> Dict[str, Any]:",
        '    """Run each node in order, merging its outputs into the context."""',
        "    for step in STEPS:",
        "        outputs = await NODE_REGISTRY[step].run(context)",
        "        context = {**context, **outputs}",
        "    return context",
        "",
    ])


def render_workflows_init(workflows: List[WorkflowModule]) -> str:
    """Generate app/workflows/__init__.py mapping workflow names to executors."""
    lines = ['"""Generated workflows."""']
    for workflow in workflows:
        lines.append(f"from app.workflows import {workflow.module}")
    lines.append("")
    lines.append("WORKFLOWS = {")
    for workflow in workflows:
        lines.append(f"    {workflow.name!r}: {workflow.module}.execute,")
    lines.append("}")
    lines.append("")
    return "\n".join(lines)


def render_routes(routes: List[RouteSpec]) -> str:
    """Generate app/api/routes.py with one route per endpoint."""
    lines = [
        "from typing import Any, Dict",
        "from fastapi import APIRouter, Request",
        "from fastapi.responses import JSONResponse",
        "from app.workflows import WORKFLOWS",
        "",
        "router = APIRouter()",
        "",
        "",
        "async def _context(request: Request) -> Dict[str, Any]:",
        '    """Merge query, path and JSON body values into one workflow context."""',
        "    context: Dict[str, Any] = dict(request.query_params)",
        "    context.update(request.path_params)",
        "    if await request.body():",
        "        try:",
        "            payload = await request.json()",
        "        except ValueError:",
        "            payload = None",
        "        if isinstance(payload, dict):",
        "            context.update(payload)",
        "    return context",
        "",
    ]

    for route in routes:
        lines.append("")
        lines.append(
            f"@router.{route.method}({route.path!r}, status_code={route.status_code}, summary={route.description!r})"
        )
        lines.append(f"async def {route.handler}(request: Request):")
        if route.workflow is None:
            lines.append('    return JSONResponse(status_code=501, content={"detail": "No workflow serves this endpoint"})')
        else:
            lines.append(f"    return await WORKFLOWS[{route.workflow!r}](await _context(request))")
    lines.append("")
    return "\n".join(lines)


def render_requirements_txt() -> str:
    """Generate requirements.txt content."""
    return """fastapi==0.115.6
uvicorn[standard]==0.30.6
"""


def render_readme(model: BackendModel, routes: List[RouteSpec]) -> str:
    """Generate README.md content."""
    lines = [
        f"# {model.name}",
        "",
        model.description,
        "",
        f"Version {model.version}. Generated by genbackend.",
        "",
        "## Run",
        "",
        "```bash",
        "pip install -r requirements.txt",
        "uvicorn app.main:app --reload",
        "```",
        "",
        "## Endpoints",
        "",
    ]
    if not routes:
        lines.append("No endpoints defined.")
    for route in routes:
        served_by = f" (workflow `{route.workflow}`)" if route.workflow else ""
        lines.append(f"- `{route.method.upper()} {route.path}`: {route.description}{served_by}")
    lines.append("")
    return "\n".join(lines)
