# tests/conftest.py
"""Shared test fixtures.

Store fixtures use a file-backed SQLite database under tmp_path (an
in-memory SQLite database is private to each connection, which would give
the clock and the snapshot different stores).

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from eddy.store import StoreClient, StoreDB

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Store fixtures
# =============================================================================


@pytest.fixture
def store_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'store' / 'engine.db'}"


@pytest.fixture
def store_db(store_url: str) -> Iterator[StoreDB]:
    db = StoreDB(store_url)
    yield db
    db.close()


@pytest.fixture
def store_client(store_db: StoreDB) -> StoreClient:
    return StoreClient(store_db)


@pytest.fixture
def settings_file(tmp_path: Path, store_url: str) -> Path:
    """Minimal eddy.yaml pointing at the tmp store."""
    path = tmp_path / "eddy.yaml"
    path.write_text(
        f"""
application: wordcount
worker_instances: 2
store:
  url: "{store_url}"
mini:
  data_dir: "{tmp_path / 'store'}"
  start_local: true
"""
    )
    return path
