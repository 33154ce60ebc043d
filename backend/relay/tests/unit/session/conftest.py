import pytest


@pytest.fixture
def manager(session_manager):
    return session_manager
