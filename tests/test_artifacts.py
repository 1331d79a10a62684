"""Tests for writing every artifact of a backend model."""
import json
import tempfile
from pathlib import Path
import pytest
import yaml
from genbackend.generators.artifacts import build_artifacts, write_artifacts
from genbackend.pipeline.validator import validate_candidate
from genbackend.schemas.backend import BackendModel


@pytest.mark.asyncio
async def test_write_artifacts_layout(movie_candidate):
    """Test that model, specification, docs and service code are written together."""
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir) / "generated"
        model = validate_candidate(movie_candidate).model

        files = await write_artifacts(model, out_dir, templates_dir=Path(temp_dir) / "templates")
        paths = [f.path for f in files]

        assert paths[:4] == ["backend.json", "openapi.json", "openapi.yaml", "docs.html"]
        assert "service/app/main.py" in paths
        assert "service/app/api/routes.py" in paths
        for path in paths:
            assert (out_dir / path).exists(), f"{path} not written"

        restored = BackendModel.model_validate_json((out_dir / "backend.json").read_text(encoding="utf-8"))
        assert restored == model

        spec = json.loads((out_dir / "openapi.json").read_text(encoding="utf-8"))
        assert list(spec["paths"]) == ["/movies"]
        assert yaml.safe_load((out_dir / "openapi.yaml").read_text(encoding="utf-8")) == spec

        html = (out_dir / "docs.html").read_text(encoding="utf-8")
        assert "movie-service API Documentation" in html


@pytest.mark.asyncio
async def test_build_artifacts_does_not_touch_output():
    with tempfile.TemporaryDirectory() as temp_dir:
        files = await build_artifacts(BackendModel(name="svc"), templates_dir=temp_dir)
        assert {"backend.json", "openapi.json", "openapi.yaml", "docs.html"} <= {f.path for f in files}
        assert all(f.content for f in files if not f.path.endswith("__init__.py"))
