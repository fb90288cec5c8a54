import pytest

from geometrylabs.model.units import DevicePixel, Distance


def test_distance_arithmetic():
    a = Distance(3.0)
    b = Distance(1.5)
    assert a + b == Distance(4.5)
    assert a - b == Distance(1.5)
    assert a * 2 == Distance(6.0)
    assert 2 * a == Distance(6.0)
    assert a / 2 == Distance(1.5)
    assert a / b == pytest.approx(2.0)
    assert a * b == pytest.approx(4.5)
    assert a % Distance(2.0) == Distance(1.0)
    assert -a == Distance(-3.0)
    assert abs(Distance(-2.0)) == Distance(2.0)


def test_distance_ordering():
    assert Distance(1.0) < Distance(2.0)
    assert Distance(2.0) >= Distance(2.0)
    assert max(Distance(1.0), Distance(5.0)) == Distance(5.0)


def test_device_pixel_is_additive_only():
    a = DevicePixel(10.0)
    assert a + DevicePixel(5.0) == DevicePixel(15.0)
    assert a - DevicePixel(5.0) == DevicePixel(5.0)
    assert a * 2 == DevicePixel(20.0)
    assert a / 4 == DevicePixel(2.5)
    assert -a == DevicePixel(-10.0)
    with pytest.raises(TypeError):
        a * DevicePixel(2.0)


def test_mixing_units_raises():
    with pytest.raises(TypeError):
        Distance(1.0) + DevicePixel(1.0)
    with pytest.raises(TypeError):
        DevicePixel(1.0) - Distance(1.0)
    with pytest.raises(TypeError):
        Distance(1.0) < DevicePixel(2.0)
    with pytest.raises(TypeError):
        Distance(DevicePixel(1.0))


def test_bool_is_not_a_scalar():
    with pytest.raises(TypeError):
        Distance(1.0) * True


def test_float_conversion():
    assert float(Distance(2.5)) == 2.5
    assert float(DevicePixel(7.0)) == 7.0
