import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from jwt_pizza_mock.fixtures import TEST_USERS
from jwt_pizza_mock.router import InterceptionRouter


@pytest.fixture
def router():
    """Fresh router with an anonymous session."""
    return InterceptionRouter()


@pytest.fixture(params=sorted(TEST_USERS))
def fixture_user(request):
    """Each registered fixture user in turn."""
    return TEST_USERS[request.param]
