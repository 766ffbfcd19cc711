"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest

from sonar_prebuild.data.context import PipelineContext
from sonar_prebuild.utils.validators import ProjectParams, SonarEndpoint


@pytest.fixture
def context(tmp_path) -> Iterator[PipelineContext]:
    """Pipeline context backed by a temporary directory."""
    ctx = PipelineContext(str(tmp_path / "context"))
    yield ctx
    ctx.close()


@pytest.fixture
def endpoint() -> SonarEndpoint:
    """Endpoint with credentials."""
    return SonarEndpoint(url="https://sonar.example.com/", username="admin", password="s3cret")


@pytest.fixture
def project() -> ProjectParams:
    """Sample project identity."""
    return ProjectParams(key="contoso:web", name="Contoso Web", version="1.0")


@pytest.fixture(autouse=True)
def _no_pr_analysis_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the agent's own pull request variable out of tests."""
    monkeypatch.delenv("PULLREQUESTSONARQUBECODEANALYSISENABLED", raising=False)
