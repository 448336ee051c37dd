from unittest.mock import AsyncMock

import pytest

from helpers.forms import load_demo_definition
from helpers.mock_db import MockFormRepository, MockSubmissionRepository


@pytest.fixture(scope="session")
def demo_definition():
    """The shipped customer feedback form, parsed once."""
    return load_demo_definition()


@pytest.fixture
def mock_db():
    """AsyncMock standing in for AsyncSession: flush/commit are no-ops."""
    return AsyncMock()


@pytest.fixture
def submission_repo():
    return MockSubmissionRepository()


@pytest.fixture
def form_repo(submission_repo):
    return MockFormRepository(submission_repo)
