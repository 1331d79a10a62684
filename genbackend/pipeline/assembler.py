"""Backend model assembly: translation followed by schema validation."""
from __future__ import annotations
import logging
from typing import Optional
from genbackend.core.config import Settings
from genbackend.core.workflow import GenerationError, GenerationResult, GenerationStage
from genbackend.pipeline.translator import CompletionClient, translate
from genbackend.pipeline.validator import Invalid, validate_candidate

log = logging.getLogger(__name__)


async def assemble(
    prompt: str,
    config: Settings,
    client: Optional[CompletionClient] = None,
    model: Optional[str] = None,
    generation_id: str = "-",
) -> GenerationResult:
    """
    Produce a canonical BackendModel from a prompt.

    Translation errors are forwarded unchanged; failed_stage records where
    assembly stopped (TRANSLATE or VALIDATE). A returned model always
    satisfies every invariant of BackendModel; a failure never carries a
    partial model.
    """
    extra = {"generation_id": generation_id, "stage": GenerationStage.TRANSLATE.value}
    translation = await translate(prompt, config, client=client, model=model)
    if not translation.ok:
        log.warning("Translation failed: %s", translation.message, extra=extra)
        return GenerationResult(
            ok=False,
            message=translation.message,
            error=translation.error,
            failed_stage=GenerationStage.TRANSLATE,
        )

    extra["stage"] = GenerationStage.VALIDATE.value
    outcome = validate_candidate(translation.raw)
    if isinstance(outcome, Invalid):
        log.warning("Candidate rejected (%s): %s", outcome.code.value, outcome.reason, extra=extra)
        error = GenerationError(code=outcome.code, message=outcome.reason, stage=GenerationStage.VALIDATE)
        return GenerationResult(ok=False, message=outcome.reason, error=error, failed_stage=GenerationStage.VALIDATE)

    model_obj = outcome.model
    log.info(
        "Assembled backend '%s' v%s: %d nodes, %d workflows, %d endpoints",
        model_obj.name,
        model_obj.version,
        model_obj.node_count,
        model_obj.workflow_count,
        model_obj.endpoint_count,
        extra=extra,
    )
    return GenerationResult(ok=True, message=f"Generated backend '{model_obj.name}'", model=model_obj)
