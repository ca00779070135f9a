import pytest


@pytest.fixture(autouse=True)
def fresh_state():
    """Give every test a default viewport and an empty history."""
    from gis_viewport.state import state, ViewportConfig
    state.reset(ViewportConfig())
    yield state


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio only; trio is not a project dependency."""
    return "asyncio"
