from __future__ import annotations

import pytest

import spanscope
from spanscope.mock import MockTracer
from spanscope.scope_managers import ContextVarsScopeManager, ThreadLocalScopeManager


@pytest.fixture(autouse=True)
def _reset_global_tracer() -> None:
    spanscope._reset_global_tracer()


@pytest.fixture(
    params=[ThreadLocalScopeManager, ContextVarsScopeManager],
    ids=["threadlocal", "contextvars"],
)
def tracer(request: pytest.FixtureRequest) -> MockTracer:
    return MockTracer(scope_manager=request.param())
