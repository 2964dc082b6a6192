import pytest

import courier


@pytest.fixture(autouse=True)
def reset_courier():
    courier.reset()
    yield
    courier.reset()
