"""
Shared pytest fixtures and configuration for statebox tests.
"""

import pytest

from statebox import IdList, ObservableDictionary, ObservableList
from tests.utils import Recorder


@pytest.fixture
def recorder():
    """Provide a fresh recording listener."""
    return Recorder()


@pytest.fixture
def make_recorder():
    """Factory for several independent recording listeners."""
    return Recorder


@pytest.fixture
def rows():
    """An IdList of Row keyed by id over an empty owned list."""
    return IdList(lambda row: row.id)


@pytest.fixture
def scores():
    """An ObservableList over [10, 20, 30]."""
    return ObservableList([10, 20, 30])


@pytest.fixture
def inventory():
    """An empty ObservableDictionary."""
    return ObservableDictionary()
