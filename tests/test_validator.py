"""Tests for raw candidate validation."""
from genbackend.core.workflow import ErrorCode
from genbackend.pipeline.validator import Invalid, Valid, validate_candidate
from genbackend.schemas.backend import BackendModel


def test_valid_candidate_resolves_every_reference(movie_candidate):
    """Test that a well-formed candidate becomes a model whose workflow references all resolve."""
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Valid), f"Expected Valid, got {outcome}"
    model = outcome.model
    known = {node.name for node in model.nodes}
    for workflow in model.workflows:
        for ref in workflow.nodes:
            assert ref in known, f"Unresolved node reference {ref}"
    assert model.node_count == 2
    assert model.workflow_count == 2
    assert model.endpoint_count == 2, "Endpoints should be flattened from workflows"


def test_defaults_applied(movie_candidate):
    """Test that version defaults to 0.1.0 and every model gets a fresh id."""
    first = validate_candidate(movie_candidate)
    movie_candidate["id"] = "fixed-id"
    second = validate_candidate(movie_candidate)

    assert isinstance(first, Valid) and isinstance(second, Valid)
    assert first.model.version == "0.1.0"
    assert first.model.id and second.model.id
    assert first.model.id != second.model.id, "Each accepted candidate should get its own id"
    assert second.model.id != "fixed-id"


def test_endpoint_normalization(movie_candidate):
    """Test that paths get a leading slash and methods are upper-cased."""
    movie_candidate["workflows"][0]["endpoints"][0]["path"] = "api/movies"
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Valid)
    paths = [e.path for e in outcome.model.endpoints]
    methods = [e.method for e in outcome.model.endpoints]
    assert paths == ["/api/movies", "/api/movies"]
    assert methods == ["GET", "POST"], "Lower-case 'post' should be stored as POST"


def test_top_level_endpoints_take_precedence(movie_candidate):
    """Test that a top-level endpoints list is used as-is instead of flattening workflows."""
    movie_candidate["endpoints"] = [{"path": "/api/health", "method": "GET", "description": "Health"}]
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Valid)
    assert [e.path for e in outcome.model.endpoints] == ["/api/health"]
    assert outcome.model.workflows[1].endpoints[0].method == "POST"


def test_missing_name_is_invalid_shape(movie_candidate):
    """Test that a candidate without a name is rejected as InvalidShape."""
    del movie_candidate["name"]
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Invalid)
    assert outcome.code == ErrorCode.INVALID_SHAPE


def test_missing_workflows_is_invalid_shape(movie_candidate):
    """Test that a candidate whose workflows is not a list is rejected as InvalidShape."""
    movie_candidate["workflows"] = {"list-movies": {}}
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Invalid)
    assert outcome.code == ErrorCode.INVALID_SHAPE


def test_non_object_is_invalid_shape():
    outcome = validate_candidate(["not", "an", "object"])
    assert isinstance(outcome, Invalid)
    assert outcome.code == ErrorCode.INVALID_SHAPE


def test_dangling_node_reference(movie_candidate):
    """Test that a workflow referencing an undefined node is rejected."""
    movie_candidate["workflows"][1]["nodes"].append("movie-notifier")
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Invalid)
    assert outcome.code == ErrorCode.DANGLING_NODE_REFERENCE
    assert "movie-notifier" in outcome.reason


def test_empty_endpoint_path(movie_candidate):
    movie_candidate["workflows"][0]["endpoints"][0]["path"] = "   "
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Invalid)
    assert outcome.code == ErrorCode.INVALID_ENDPOINT


def test_unsupported_method(movie_candidate):
    """Test that methods outside GET/POST/PUT/DELETE are rejected."""
    movie_candidate["workflows"][0]["endpoints"][0]["method"] = "PATCH"
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Invalid)
    assert outcome.code == ErrorCode.INVALID_ENDPOINT
    assert "PATCH" in outcome.reason


def test_duplicate_node_name(movie_candidate):
    movie_candidate["nodes"].append(dict(movie_candidate["nodes"][0]))
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Invalid)
    assert outcome.code == ErrorCode.DUPLICATE_NAME


def test_duplicate_workflow_name(movie_candidate):
    movie_candidate["workflows"][1]["name"] = "list-movies"
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Invalid)
    assert outcome.code == ErrorCode.DUPLICATE_NAME


def test_unknown_node_type_is_invalid_model(movie_candidate):
    """Test that schema violations beyond the named checks map to InvalidModel."""
    movie_candidate["nodes"][0]["type"] = "quantum-computer"
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Invalid)
    assert outcome.code == ErrorCode.INVALID_MODEL
    assert "nodes.0.type" in outcome.reason


def test_types_are_case_insensitive(movie_candidate):
    movie_candidate["nodes"][0]["type"] = "Validator"
    movie_candidate["nodes"][0]["inputs"][0]["type"] = "STRING"
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Valid)
    assert outcome.model.nodes[0].type == "validator"
    assert outcome.model.nodes[0].inputs[0].type == "string"


def test_json_round_trip_keeps_invariants(movie_candidate):
    """Test that serializing a model and parsing it back preserves the model."""
    outcome = validate_candidate(movie_candidate)
    assert isinstance(outcome, Valid)

    restored = BackendModel.model_validate_json(outcome.model.to_json())

    assert restored == outcome.model
    assert restored.name == "movie-service"
    known = {node.name for node in restored.nodes}
    assert all(ref in known for wf in restored.workflows for ref in wf.nodes)
    assert '"in": "body"' in outcome.model.to_json(), "Parameter location should serialize as 'in'"
    assert "node_count" not in outcome.model.to_dict(), "Counts are computed, never serialized"


def test_express_style_path_parameters(movie_candidate):
    """Test that :name path segments are rewritten to {name}."""
    movie_candidate["workflows"][0]["endpoints"][0]["path"] = "/api/movies/:movieId/reviews/:id"
    outcome = validate_candidate(movie_candidate)

    assert isinstance(outcome, Valid)
    assert outcome.model.endpoints[0].path == "/api/movies/{movieId}/reviews/{id}"
