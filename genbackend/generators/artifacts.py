"""Writes every derived artifact of a backend model to disk."""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union
from genbackend.generators.docs import render
from genbackend.generators.openapi import dump_yaml, project
from genbackend.generators.service_gen.generator import render_service
from genbackend.generators.service_gen.types import GeneratedFile
from genbackend.generators.service_gen.writer import write_files
from genbackend.schemas.backend import BackendModel

log = logging.getLogger(__name__)

SERVICE_DIR = "service"


async def build_artifacts(model: BackendModel, templates_dir: Optional[Union[str, Path]] = None) -> List[GeneratedFile]:
    """Build the model JSON, OpenAPI documents, HTML docs and service sources in memory."""
    spec = project(model)
    html = await render(model, templates_dir=templates_dir)
    files = [
        GeneratedFile(path="backend.json", content=model.to_json()),
        GeneratedFile(path="openapi.json", content=json.dumps(spec, indent=2)),
        GeneratedFile(path="openapi.yaml", content=dump_yaml(spec)),
        GeneratedFile(path="docs.html", content=html),
    ]
    for service_file in render_service(model):
        files.append(GeneratedFile(path=f"{SERVICE_DIR}/{service_file.path}", content=service_file.content))
    return files


async def write_artifacts(
    model: BackendModel,
    out_dir: Path,
    templates_dir: Optional[Union[str, Path]] = None,
) -> List[GeneratedFile]:
    """
    Write all artifacts for a backend model.

    Layout of out_dir:
        backend.json   the model, verbatim
        openapi.json   projected specification
        openapi.yaml   same specification as YAML
        docs.html      rendered documentation
        service/       runnable FastAPI service

    Returns:
        List of GeneratedFile objects written
    """
    files = await build_artifacts(model, templates_dir=templates_dir)
    write_files(files, out_dir)
    log.info("Generated %d artifacts for '%s' in %s", len(files), model.name, out_dir)
    return files
