from __future__ import annotations
import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from genbackend.core.config import Settings
from genbackend.core.state import ModelStore
from genbackend.core.workflow import GenerationResult, GenerationStage
from genbackend.pipeline.assembler import assemble
from genbackend.pipeline.translator import CompletionClient

log = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class GenerationJob:
    prompt: str
    model: Optional[str] = None
    identity: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    stage: GenerationStage = GenerationStage.CHECK_INPUT
    status: str = "QUEUED"
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    backend_id: Optional[str] = None
    backend_name: Optional[str] = None


FINISHED_STATUSES = ("DONE", "FAILED")
MAX_JOBS = 1000


class GenerationRegistry:
    """
    In-memory record of generation requests, keyed by job id.

    Holds at most max_jobs records; once full, the oldest finished jobs are
    evicted first. Jobs still queued or running are never evicted.
    """

    def __init__(self, max_jobs: int = MAX_JOBS) -> None:
        self.max_jobs = max_jobs
        self._jobs: "OrderedDict[str, GenerationJob]" = OrderedDict()

    def create(self, prompt: str, model: Optional[str] = None, identity: Optional[str] = None) -> GenerationJob:
        job = GenerationJob(prompt=prompt, model=model, identity=identity)
        self._jobs[job.id] = job
        self._evict()
        return job

    def get(self, job_id: str) -> Optional[GenerationJob]:
        return self._jobs.get(job_id)

    def __len__(self) -> int:
        return len(self._jobs)

    def _evict(self) -> None:
        excess = len(self._jobs) - self.max_jobs
        if excess <= 0:
            return
        finished = [job_id for job_id, job in self._jobs.items() if job.status in FINISHED_STATUSES]
        for job_id in finished[:excess]:
            del self._jobs[job_id]


def _set_stage(job: GenerationJob, stage: GenerationStage, status: Optional[str] = None) -> None:
    job.stage = stage
    if status:
        job.status = status
    job.updated_at = _now()


async def run_generation(
    job: GenerationJob,
    store: ModelStore,
    config: Settings,
    client: Optional[CompletionClient] = None,
) -> GenerationResult:
    """
    Run one generation and install its model as current on success.

    Concurrent runs are independent; whichever finishes last replaces the
    current model. Failures are recorded on the job, never raised.
    """
    extra = {"generation_id": job.id, "stage": GenerationStage.TRANSLATE.value}
    _set_stage(job, GenerationStage.TRANSLATE, status="RUNNING")
    log.info("Starting generation (identity=%s)", job.identity or "-", extra=extra)

    try:
        result = await assemble(job.prompt, config, client=client, model=job.model, generation_id=job.id)
    except Exception as e:
        log.exception("Generation failed unexpectedly", extra=extra)
        job.error_message = str(e)
        _set_stage(job, GenerationStage.FAILED, status="FAILED")
        return GenerationResult(ok=False, message=f"Generation failed: {e}")

    if not result.ok:
        job.error_code = result.error.code.value if result.error else None
        job.error_message = result.message
        _set_stage(job, GenerationStage.FAILED, status="FAILED")
        return result

    _set_stage(job, GenerationStage.INSTALL)
    store.replace(result.model)
    job.backend_id = result.model.id
    job.backend_name = result.model.name
    _set_stage(job, GenerationStage.DONE, status="DONE")
    log.info("Generation completed successfully", extra={"generation_id": job.id, "stage": "DONE"})
    return result
