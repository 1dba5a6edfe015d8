"""Root conftest for tests."""

import os
from unittest.mock import AsyncMock

import pytest

from tests.helpers import make_result, make_row

if os.getenv("APP_ENV", "").strip().lower() == "prod":
    raise RuntimeError("Refusing to run tests with APP_ENV=prod")

os.environ["APP_ENV"] = "local"
os.environ["SECURITY_SKIP_JWT_VALIDATION"] = "true"
os.environ.setdefault("METRICS_TOKEN", "test-metrics-token")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    dir_marker_map = {
        "unit": pytest.mark.unit,
        "smoke": pytest.mark.smoke,
        "integration": pytest.mark.integration,
    }
    for item in items:
        test_path = str(item.fspath)
        for dir_name, marker in dir_marker_map.items():
            if f"/{dir_name}/" in test_path or f"\\{dir_name}\\" in test_path:
                item.add_marker(marker)
                break


@pytest.fixture
def mock_session():
    """AsyncSession stand-in whose execute returns an empty result by default."""
    session = AsyncMock()
    session.execute = AsyncMock(return_value=make_result())
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def company_row():
    return make_row(
        handle="c1",
        name="C1",
        description="Desc1",
        numEmployees=1,
        logoUrl="http://c1.img",
    )


@pytest.fixture
def job_row():
    return make_row(id=1, title="j1", salary=10, equity=None, company_handle="c1")
