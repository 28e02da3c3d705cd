"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Bind every Document class to an in-process mongomock database
  - Restore per-type taggable configuration changed by a test
"""

import mongomock
import pytest

from taggable.core import background_worker
from taggable.core.taggable import configure_taggable, set_taggable_config
from taggable.db.mongo_sync import set_database


@pytest.fixture(autouse=True)
def database():
    db = mongomock.MongoClient()["taggable_test"]
    set_database(db)
    yield db
    set_database(None)


@pytest.fixture
def reconfigure():
    """Apply ``configure_taggable`` overrides, undone after the test."""
    changed = []

    def apply(document_type, **overrides):
        changed.append((document_type, configure_taggable(document_type, **overrides)))

    yield apply

    for document_type, previous in reversed(changed):
        set_taggable_config(document_type, previous)


@pytest.fixture
def aggregation_worker():
    worker = background_worker.AggregationWorker(num_workers=1)
    background_worker.set_aggregation_worker(worker)
    yield worker
    worker.join()
    background_worker.set_aggregation_worker(None)
