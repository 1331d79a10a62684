import logging
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from genbackend.api.deps import get_completion_client, get_registry, get_settings, get_store
from genbackend.core.config import Settings
from genbackend.core.state import ModelStore
from genbackend.pipeline.translator import CompletionClient, check_inputs
from genbackend.schemas.jobs import GenerateRequest, GenerationResponse
from genbackend.tasks.jobs import GenerationJob, GenerationRegistry, run_generation

log = logging.getLogger(__name__)

router = APIRouter()


def _to_response(job: GenerationJob) -> GenerationResponse:
    return GenerationResponse(
        id=job.id,
        prompt=job.prompt,
        model=job.model,
        identity=job.identity,
        stage=job.stage,
        status=job.status,
        error_code=job.error_code,
        error_message=job.error_message,
        backend_id=job.backend_id,
        backend_name=job.backend_name,
        created_at=job.created_at,
        updated_at=job.updated_at,
    )


@router.post("/generate", name="create_generation", response_model=GenerationResponse, status_code=202)
def create_generation(
    req: GenerateRequest,
    background_tasks: BackgroundTasks,
    registry: GenerationRegistry = Depends(get_registry),
    store: ModelStore = Depends(get_store),
    config: Settings = Depends(get_settings),
    client: Optional[CompletionClient] = Depends(get_completion_client),
):
    error = check_inputs(req.prompt, config.openai_api_key)
    if error:
        raise HTTPException(status_code=400, detail={"code": error.code.value, "message": error.message})

    try:
        job = registry.create(req.prompt, model=req.model, identity=req.identity)
        background_tasks.add_task(run_generation, job, store, config, client)
    except Exception as e:
        log.exception("Failed to schedule generation")
        raise HTTPException(status_code=500, detail=f"Failed to schedule generation: {e}")

    log.info("Queued generation", extra={"generation_id": job.id, "stage": job.stage.value})
    return _to_response(job)


@router.get("/generations/{generation_id}", response_model=GenerationResponse)
def get_generation(generation_id: str, registry: GenerationRegistry = Depends(get_registry)):
    job = registry.get(generation_id)
    if not job:
        raise HTTPException(status_code=404, detail="Generation not found")
    return _to_response(job)
