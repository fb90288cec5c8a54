import pytest

from geometrylabs.model.viewport import DeviceRect, Viewport


@pytest.fixture
def rect():
    return DeviceRect.from_corners(0.0, 0.0, 200.0, 100.0)


@pytest.fixture
def viewport(rect):
    vp = Viewport()
    vp.update_state(rect)
    return vp
