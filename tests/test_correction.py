import pytest

from veml7700.correction import (
    C0,
    calculate_raw_threshold_value,
    correct_high_lux,
    get_lux_raw_conversion_factor,
    inverse_high_lux_correction,
    needs_high_lux_correction,
)
from veml7700.types import Gain, IntegrationTime


def test_conversion_factor_pinned_values():
    assert get_lux_raw_conversion_factor(IntegrationTime.MS_800, Gain.TWO) == pytest.approx(0.0036)
    assert get_lux_raw_conversion_factor(IntegrationTime.MS_100, Gain.TWO) == pytest.approx(0.0288)


@pytest.mark.parametrize("gain", list(Gain))
def test_factor_doubles_when_integration_time_halves(gain):
    times = [
        IntegrationTime.MS_800,
        IntegrationTime.MS_400,
        IntegrationTime.MS_200,
        IntegrationTime.MS_100,
        IntegrationTime.MS_50,
        IntegrationTime.MS_25,
    ]
    factors = [get_lux_raw_conversion_factor(it, gain) for it in times]
    for longer, shorter in zip(factors, factors[1:]):
        assert shorter == pytest.approx(2 * longer)


@pytest.mark.parametrize("it", list(IntegrationTime))
def test_factor_is_inverse_to_gain(it):
    base = get_lux_raw_conversion_factor(it, Gain.TWO)
    for gain in Gain:
        factor = get_lux_raw_conversion_factor(it, gain)
        assert factor * gain.value == pytest.approx(base * Gain.TWO.value)


def test_correct_high_lux_zero_and_linear_term():
    assert correct_high_lux(0.0) == 0.0
    assert correct_high_lux(1e-6) == pytest.approx(C0 * 1e-6, rel=1e-6)


@pytest.mark.parametrize("lux", [1500.0, 2000.0, 10000.0, 50000.0])
def test_inverse_round_trip(lux):
    assert correct_high_lux(inverse_high_lux_correction(lux)) == pytest.approx(lux, rel=1e-6)


def test_inverse_is_monotonic():
    values = [inverse_high_lux_correction(x) for x in (2000.0, 5000.0, 20000.0)]
    assert values == sorted(values)


def test_needs_correction_only_for_low_gain_above_limit():
    assert needs_high_lux_correction(Gain.ONE_QUARTER, 1000.5)
    assert needs_high_lux_correction(Gain.ONE_EIGHTH, 5000.0)
    assert not needs_high_lux_correction(Gain.ONE_QUARTER, 1000.0)
    assert not needs_high_lux_correction(Gain.TWO, 5000.0)


@pytest.mark.parametrize("it", list(IntegrationTime))
@pytest.mark.parametrize("gain", [Gain.ONE, Gain.TWO])
@pytest.mark.parametrize("lux", [0.5, 12.3, 100.0])
def test_uncorrected_threshold_brackets_lux(it, gain, lux):
    factor = get_lux_raw_conversion_factor(it, gain)
    raw = calculate_raw_threshold_value(it, gain, lux)
    if raw < 0xFFFF:
        assert raw * factor <= lux + 1e-9
        assert (raw + 1) * factor > lux - 1e-9


@pytest.mark.parametrize("gain", [Gain.ONE_QUARTER, Gain.ONE_EIGHTH])
@pytest.mark.parametrize("lux", [2000.0, 10000.0, 50000.0])
def test_corrected_threshold_round_trips(gain, lux):
    it = IntegrationTime.MS_25
    factor = get_lux_raw_conversion_factor(it, gain)
    raw = calculate_raw_threshold_value(it, gain, lux)
    assert correct_high_lux(raw * factor) <= lux
    assert correct_high_lux((raw + 1) * factor) > lux


def test_threshold_saturates_high():
    assert calculate_raw_threshold_value(IntegrationTime.MS_800, Gain.TWO, 1e9) == 0xFFFF


def test_threshold_saturates_low():
    assert calculate_raw_threshold_value(IntegrationTime.MS_100, Gain.ONE, -5.0) == 0


def test_threshold_zero_lux():
    assert calculate_raw_threshold_value(IntegrationTime.MS_100, Gain.ONE_QUARTER, 0.0) == 0