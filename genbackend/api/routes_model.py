from fastapi import APIRouter, Depends, Request
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse
from genbackend.api.deps import get_settings, get_store, require_model
from genbackend.core.config import Settings
from genbackend.core.state import ModelStore
from genbackend.generators.docs import render
from genbackend.generators.openapi import project
from genbackend.schemas.backend import BackendModel

router = APIRouter()


@router.get("/")
def index(
    request: Request,
    store: ModelStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    model = store.current()
    return {
        "service": config.app_name,
        "backend": model.name if model else None,
        "links": {
            "preview": str(request.url_for("preview")),
            "docs": str(request.url_for("documentation")),
            "openapi": str(request.url_for("openapi_spec")),
            "api_docs": str(request.url_for("api_docs")),
            "generate": str(request.url_for("create_generation")),
        },
    }


@router.get("/preview", name="preview")
def preview(model: BackendModel = Depends(require_model)):
    return model.to_dict()


@router.get("/docs", name="documentation", response_class=HTMLResponse)
async def documentation(
    model: BackendModel = Depends(require_model),
    config: Settings = Depends(get_settings),
):
    return HTMLResponse(await render(model, templates_dir=config.templates_dir))


@router.get("/openapi.json", name="openapi_spec")
def openapi_spec(model: BackendModel = Depends(require_model)):
    return project(model)


@router.get("/api-docs", name="api_docs", response_class=HTMLResponse)
def api_docs(request: Request, model: BackendModel = Depends(require_model)):
    return get_swagger_ui_html(
        openapi_url=str(request.url_for("openapi_spec")),
        title=f"{model.name} - API Documentation",
    )
