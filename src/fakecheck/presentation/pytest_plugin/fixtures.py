"""pytest fixtures for tests using fakes.

Every test gets its own FakeScope; nothing leaks between tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from fakecheck.application.scope import FakeScope

if TYPE_CHECKING:
    from collections.abc import Callable

SCOPE_KEY = pytest.StashKey[FakeScope]()


@pytest.fixture
def fake_scope(request: pytest.FixtureRequest) -> FakeScope:
    """Fake scope of the current test.

    Kept on the test item so failed reports can include the call logs.

    Returns:
        Fresh FakeScope
    """
    scope = FakeScope()
    request.node.stash[SCOPE_KEY] = scope
    return scope


@pytest.fixture
def fake(fake_scope: FakeScope) -> Callable[..., object]:
    """Shortcut for ``fake_scope.fake``.

    Example:
        def test_loads(fake):
            repo = fake(Repository)
    """
    return fake_scope.fake
