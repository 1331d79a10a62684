"""Tests for overlapping generations sharing one model store."""
import asyncio
import copy
import json
import pytest
from genbackend.core.state import ModelStore
from genbackend.tasks.jobs import GenerationRegistry, run_generation


class GatedClient:
    """Completion client that holds its reply until the gate opens."""

    def __init__(self, reply, gate: asyncio.Event):
        self.reply = reply
        self.gate = gate

    async def complete(self, messages, model, temperature, max_tokens, json_mode=True) -> str:
        await self.gate.wait()
        return json.dumps(self.reply)


def _named(candidate, name):
    renamed = copy.deepcopy(candidate)
    renamed["name"] = name
    return renamed


@pytest.mark.asyncio
async def test_second_request_finishing_first_is_installed(movie_candidate, fake_client, test_settings):
    """
    Test that installation follows completion order, not request order.

    The first request is still waiting on the text-generation service when
    the second completes, so the second model becomes current immediately.
    """
    store = ModelStore()
    registry = GenerationRegistry()
    gate = asyncio.Event()

    job_a = registry.create("first prompt")
    job_b = registry.create("second prompt")
    task_a = asyncio.create_task(run_generation(job_a, store, test_settings, GatedClient(_named(movie_candidate, "first"), gate)))
    task_b = asyncio.create_task(run_generation(job_b, store, test_settings, fake_client(reply=_named(movie_candidate, "second"))))

    result_b = await task_b
    assert result_b.ok
    assert store.current().name == "second"
    assert job_b.status == "DONE"
    assert job_a.status == "RUNNING", "First request should still be in flight"

    gate.set()
    result_a = await task_a
    assert result_a.ok
    assert job_a.status == "DONE"
    # Last write wins: the later completion replaces the earlier one.
    assert store.current().name == "first"
    assert store.current().id != result_b.model.id


@pytest.mark.asyncio
async def test_late_failure_keeps_current_model(movie_candidate, fake_client, test_settings):
    """Test that a slower request that fails leaves the faster request's model installed."""
    store = ModelStore()
    registry = GenerationRegistry()
    gate = asyncio.Event()

    broken = _named(movie_candidate, "first")
    broken["workflows"][0]["nodes"] = ["missing-node"]
    job_a = registry.create("first prompt")
    job_b = registry.create("second prompt")
    task_a = asyncio.create_task(run_generation(job_a, store, test_settings, GatedClient(broken, gate)))
    await asyncio.sleep(0)
    await run_generation(job_b, store, test_settings, fake_client(reply=_named(movie_candidate, "second")))

    gate.set()
    result_a = await task_a

    assert not result_a.ok
    assert job_a.status == "FAILED"
    assert job_a.error_code == "DanglingNodeReference"
    assert store.current().name == "second"


@pytest.mark.asyncio
async def test_models_are_independent(movie_candidate, fake_client, test_settings):
    """Test that regenerating with the same node names yields a wholly new model."""
    store = ModelStore()
    registry = GenerationRegistry()

    first = await run_generation(registry.create("p"), store, test_settings, fake_client(reply=movie_candidate))
    changed = copy.deepcopy(movie_candidate)
    changed["nodes"][0]["type"] = "transformer"
    second = await run_generation(registry.create("p"), store, test_settings, fake_client(reply=changed))

    assert first.model.nodes[0].type == "validator", "Earlier snapshot is never mutated"
    assert second.model.nodes[0].type == "transformer"
    assert store.current() is second.model
