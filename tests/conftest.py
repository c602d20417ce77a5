"""Root conftest.py for the Resource Catalog API test suite.

This file contains project-wide fixtures and pytest configuration.
"""

import os
from collections.abc import Generator

import pytest

from src.core.config import get_settings
from src.core.context import RequestContext
from src.domain.resource import Resource


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Clear the settings cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove app-specific environment variables that could leak into Settings.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        pytest.MonkeyPatch: The monkeypatch instance for env manipulation.
    """
    env_prefixes = [
        "APP_",
        "API_",
        "ENVIRONMENT",
        "DEBUG",
        "DOCS_URL",
        "REDOC_URL",
        "OPENAPI_URL",
        "LOG_CONFIG__",
        "CORS_CONFIG__",
        "CATALOG_CONFIG__",
        "OBSERVABILITY_CONFIG__",
    ]
    for key in list(os.environ):
        if any(key.startswith(prefix) for prefix in env_prefixes):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def clean_context() -> Generator[None]:
    """Clear the request context before and after each test."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture
def sample_resources() -> list[Resource]:
    """Provide a small catalog with a repeated category and a mixed-case one.

    Returns:
        list[Resource]: Four records in catalog order.
    """
    return [
        Resource(
            id=1,
            title="Intro to Transformers",
            description="Attention from first principles.",
            url="https://example.com/transformers",
            main_cat1="AI",
            main_cat2="NLP",
            tag1="attention",
            tag2="",
            tag3="",
        ),
        Resource(
            id=2,
            title="Pipelines That Ship",
            description="Continuous delivery for small teams.",
            url="https://example.com/pipelines",
            main_cat1="DEVOPS",
            main_cat2="CI",
            tag1="ci",
            tag2="cd",
            tag3="",
        ),
        Resource(
            id=3,
            title="Evaluating Language Models",
            description="Benchmarks and their pitfalls.",
            url="https://example.com/evals",
            main_cat1="AI",
            main_cat2="RESEARCH",
            tag1="benchmarks",
            tag2="",
            tag3="",
        ),
        Resource(
            id=4,
            title="Prompting Notes",
            description="Labelled with a lowercase category on purpose.",
            url="https://example.com/prompting",
            main_cat1="Ai",
            main_cat2="",
            tag1="",
            tag2="",
            tag3="",
        ),
    ]
