"""Lux/raw conversion factors and the high-lux non-linearity correction."""

from __future__ import annotations

import math

from veml7700.types import Gain, IntegrationTime

C0 = 1.0023
C1 = 8.1488e-05
C2 = -9.3924e-09
C3 = 6.0135e-13

_GAIN_FACTORS = {
    Gain.TWO: 1.0,
    Gain.ONE: 2.0,
    Gain.ONE_QUARTER: 8.0,
    Gain.ONE_EIGHTH: 16.0,
}

_IT_FACTORS = {
    IntegrationTime.MS_800: 0.0036,
    IntegrationTime.MS_400: 0.0072,
    IntegrationTime.MS_200: 0.0144,
    IntegrationTime.MS_100: 0.0288,
    IntegrationTime.MS_50: 0.0576,
    IntegrationTime.MS_25: 0.1152,
}

_LOW_GAINS = (Gain.ONE_QUARTER, Gain.ONE_EIGHTH)
_CORRECTION_LIMIT = 1000.0
_U16_MAX = 0xFFFF


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0.0 else math.nan


def _cbrt(x: float) -> float:
    # Fractional powers of negative numbers are undefined here, as with powf.
    return x ** (1.0 / 3.0) if x >= 0.0 else math.nan


def _to_u16(value: float) -> int:
    """Convert to an unsigned 16-bit integer, truncating and saturating."""
    if math.isnan(value):
        return 0
    if value <= 0.0:
        return 0
    if value >= _U16_MAX:
        return _U16_MAX
    return int(value)


def needs_high_lux_correction(gain: Gain, lux: float) -> bool:
    """Whether the non-linearity correction applies to this gain and lux."""
    return gain in _LOW_GAINS and lux > _CORRECTION_LIMIT


def get_lux_raw_conversion_factor(it: IntegrationTime, gain: Gain) -> float:
    """Return the lux per raw count for the given integration time and gain."""
    return _GAIN_FACTORS[gain] * _IT_FACTORS[it]


def correct_high_lux(lux: float) -> float:
    """Apply the polynomial correction used for readings above 1000 lx."""
    return lux**4 * C3 + lux**3 * C2 + lux * lux * C1 + lux * C0


def inverse_high_lux_correction(lux: float) -> float:
    """Invert the high-lux correction polynomial.

    The quartic is solved symbolically for its coefficients, which avoids
    the overflow and underflow of solving it numerically with these values.
    """
    cbrt2 = 2.0 ** (1.0 / 3.0)
    p = C1**2 - 3.0 * C2 * C0 - 12.0 * C3 * lux
    q = (
        2.0 * C1**3
        - 9.0 * C2 * C1 * C0
        + 27.0 * C3 * C0**2
        - 27.0 * C2**2 * lux
        + 72.0 * C3 * C1 * lux
    )
    r = _cbrt(q + _sqrt(-4.0 * p**3 + q**2))
    cross = cbrt2 * p / (3.0 * C3 * r)
    cube = r / (3.0 * cbrt2 * C3)

    s = C2**2 / (4.0 * C3**2) - (2.0 * C1) / (3.0 * C3) + cross + cube
    sqrt_s = _sqrt(s)
    t = (
        C2**2 / (2.0 * C3**2)
        - (4.0 * C1) / (3.0 * C3)
        - cross
        - cube
        - (-(C2**3 / C3**3) + (4.0 * C2 * C1) / C3**2 - (8.0 * C0) / C3)
        / (4.0 * sqrt_s)
    )
    return -C2 / (4.0 * C3) - sqrt_s / 2.0 + _sqrt(t) / 2.0


def calculate_raw_threshold_value(it: IntegrationTime, gain: Gain, lux: float) -> int:
    """Return the raw threshold register value for a lux threshold.

    For values above 1000 lx with 1/4 or 1/8 gain the inverse of the
    correction formula is applied first.
    """
    factor = get_lux_raw_conversion_factor(it, gain)
    if needs_high_lux_correction(gain, lux):
        lux = inverse_high_lux_correction(lux)
    return _to_u16(lux / factor)