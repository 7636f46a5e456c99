"""Shared test fixtures for readme-updater."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from readme_updater.config.models import ReadmeUpdaterConfig
from readme_updater.llm.base import ProviderAdapter
from readme_updater.llm.models import Provider
from readme_updater.vcs.base import HistoryProvider
from readme_updater.vcs.models import CommitInfo

CURRENT_README = "# Widget API\n\nREST API for widget management.\n\n## Usage\n\nRun `widget serve`.\n"

FENCED_RESPONSE = (
    "Documented the new login endpoint.\n"
    "```markdown\n"
    "# Widget API\n\n"
    "REST API for widget management.\n\n"
    "## Authentication\n\n"
    "POST /login returns a session token.\n"
    "```"
)

TRUNCATED_RESPONSE = (
    "Added a features section.\n"
    "```markdown\n"
    "# Widget API\n\n"
    "## Features\n\n"
    "- Login endpoint\n"
    "- and more features to add...\n"
    "```"
)

COMPLETED_RESPONSE = (
    "```markdown\n"
    "# Widget API\n\n"
    "## Features\n\n"
    "- Login endpoint\n"
    "- Session tokens\n"
    "```"
)


def make_adapter(provider: Provider, responses: list) -> MagicMock:
    """A ProviderAdapter double whose invoke() yields ``responses`` in order."""
    adapter = MagicMock(spec=ProviderAdapter)
    adapter.provider = provider
    adapter.invoke = AsyncMock(side_effect=list(responses))
    return adapter


@pytest.fixture
def credentials():
    return {
        "claude": "sk-ant-test",
        "chatgpt": "sk-openai-test",
        "gemini": "gemini-test-key",
    }


@pytest.fixture
def sample_commits():
    """Three commits, newest first, as the history provider returns them."""
    return [
        CommitInfo(
            sha="c3c3c3c3c3c3c3c3c3c3",
            message="Add login endpoint\n\nAlso adds session tokens.",
            date=datetime(2026, 10, 3, tzinfo=timezone.utc),
            author="Dana",
        ),
        CommitInfo(
            sha="b2b2b2b2b2b2b2b2b2b2",
            message="Refactor routing",
            date=datetime(2026, 10, 2, tzinfo=timezone.utc),
            author="Sam",
        ),
        CommitInfo(
            sha="a1a1a1a1a1a1a1a1a1a1",
            message="Initial commit",
            date=datetime(2026, 10, 1, tzinfo=timezone.utc),
            author="Dana",
        ),
    ]


@pytest.fixture
def sample_changes():
    return (
        "File: src/auth.py\n"
        "Status: added\n"
        "Changes:\n"
        "@@ -0,0 +1,3 @@\n"
        "+def login(user):\n"
        "+    return issue_token(user)\n"
        "+\n"
    )


@pytest.fixture
def mock_history_provider(sample_commits, sample_changes):
    provider = MagicMock(spec=HistoryProvider)
    provider.get_commit_history = AsyncMock(return_value=sample_commits)
    provider.get_code_changes = AsyncMock(return_value=sample_changes)
    return provider


@pytest.fixture
def sample_config():
    return ReadmeUpdaterConfig()
