"""Test configuration and fixtures."""

from uuid import uuid4

import pytest

from relay.domain.value import ThreadId


@pytest.fixture
def thread_id() -> ThreadId:
    return ThreadId(uuid4())
