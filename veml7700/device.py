"""Driver for the VEML7700 ambient light sensor over an I2C bus."""

from __future__ import annotations

from contextlib import contextmanager
from enum import IntEnum
from typing import Iterator, Protocol

from veml7700.correction import (
    calculate_raw_threshold_value,
    correct_high_lux,
    get_lux_raw_conversion_factor,
    needs_high_lux_correction,
)
from veml7700.types import (
    FaultCount,
    Gain,
    IntegrationTime,
    InterruptStatus,
    PowerSavingMode,
)

DEVICE_ADDRESS = 0x10
_U16_MAX = 0xFFFF


class _Register(IntEnum):
    ALS_CONF = 0x00
    ALS_WH = 0x01
    ALS_WL = 0x02
    PSM = 0x03
    ALS = 0x04
    WHITE = 0x05
    ALS_INT = 0x06


_ALS_SD = 0x01
_ALS_INT_EN = 0x02
_PSM_EN = 0x01
_INT_TH_LOW = 1 << 15
_INT_TH_HIGH = 1 << 14

_IT_SHIFT = 6
_IT_FIELD = 0b1111
_IT_BITS = {
    IntegrationTime.MS_25: 0b1100,
    IntegrationTime.MS_50: 0b1000,
    IntegrationTime.MS_100: 0b0000,
    IntegrationTime.MS_200: 0b0001,
    IntegrationTime.MS_400: 0b0010,
    IntegrationTime.MS_800: 0b0011,
}

_GAIN_SHIFT = 11
_GAIN_FIELD = 0b11
_GAIN_BITS = {
    Gain.ONE: 0,
    Gain.TWO: 1,
    Gain.ONE_EIGHTH: 2,
    Gain.ONE_QUARTER: 3,
}

_FC_SHIFT = 4
_FC_FIELD = 0b11
_FC_BITS = {
    FaultCount.ONE: 0,
    FaultCount.TWO: 1,
    FaultCount.FOUR: 2,
    FaultCount.EIGHT: 3,
}

_PSM_BITS = {
    PowerSavingMode.ONE: 0,
    PowerSavingMode.TWO: 1,
    PowerSavingMode.THREE: 2,
    PowerSavingMode.FOUR: 3,
}


class Veml7700Error(Exception):
    """Raised when communication with the sensor over the bus fails."""


class I2CBus(Protocol):
    """The I2C bus operations the driver needs, with 7-bit addresses."""

    def write(self, address: int, data: bytes) -> None:
        """Write ``data`` to the device at ``address``."""
        ...

    def write_read(self, address: int, data: bytes, read_length: int) -> bytes:
        """Write ``data``, then read ``read_length`` bytes from ``address``."""
        ...


@contextmanager
def _bus_errors() -> Iterator[None]:
    try:
        yield
    except Veml7700Error:
        raise
    except Exception as exc:
        raise Veml7700Error(f"I2C bus error: {exc}") from exc


def convert_raw_als_to_lux(it: IntegrationTime, gain: Gain, raw_als: int) -> float:
    """Convert a raw ALS reading to lux.

    For values above 1000 lx with 1/4 or 1/8 gain the correction
    ``6.0135e-13*x^4 - 9.3924e-9*x^3 + 8.1488e-5*x^2 + 1.0023*x`` is applied.
    """
    lux = raw_als * get_lux_raw_conversion_factor(it, gain)
    if needs_high_lux_correction(gain, lux):
        return correct_high_lux(lux)
    return lux


class Veml7700:
    """VEML7700 device driver.

    The device starts shut down, with gain 1 and 100 ms integration time.
    """

    def __init__(self, i2c: I2CBus) -> None:
        self._i2c = i2c
        self._config = _ALS_SD
        self._gain = Gain.ONE
        self._it = IntegrationTime.MS_100

    @property
    def gain(self) -> Gain:
        """The gain last configured."""
        return self._gain

    @property
    def integration_time(self) -> IntegrationTime:
        """The integration time last configured."""
        return self._it

    def destroy(self) -> I2CBus:
        """Release the driver and return the bus."""
        return self._i2c

    def enable(self) -> None:
        """Power the device on.

        Wait about 4 ms before the first measurement is taken.
        """
        self._set_config(self._config & ~_ALS_SD)

    def disable(self) -> None:
        """Shut the device down."""
        self._set_config(self._config | _ALS_SD)

    def set_integration_time(self, it: IntegrationTime) -> None:
        """Set the integration time."""
        bits = _IT_BITS[it]
        config = self._config & ~(_IT_FIELD << _IT_SHIFT) | (bits << _IT_SHIFT)
        self._set_config(config)
        self._it = it

    def set_gain(self, gain: Gain) -> None:
        """Set the gain."""
        bits = _GAIN_BITS[gain]
        config = self._config & ~(_GAIN_FIELD << _GAIN_SHIFT) | (bits << _GAIN_SHIFT)
        self._set_config(config)
        self._gain = gain

    def set_fault_count(self, fc: FaultCount) -> None:
        """Set how many consecutive threshold crossings trigger an interrupt."""
        bits = _FC_BITS[fc]
        config = self._config & ~(_FC_FIELD << _FC_SHIFT) | (bits << _FC_SHIFT)
        self._set_config(config)

    def enable_interrupts(self) -> None:
        """Enable interrupt generation."""
        self._set_config(self._config | _ALS_INT_EN)

    def disable_interrupts(self) -> None:
        """Disable interrupt generation."""
        self._set_config(self._config & ~_ALS_INT_EN)

    def set_high_threshold_raw(self, threshold: int) -> None:
        """Set the ALS high threshold as a raw value."""
        self._write_register(_Register.ALS_WH, threshold)

    def set_low_threshold_raw(self, threshold: int) -> None:
        """Set the ALS low threshold as a raw value."""
        self._write_register(_Register.ALS_WL, threshold)

    def set_high_threshold_lux(self, lux: float) -> None:
        """Set the ALS high threshold in lux, compensating where needed."""
        self.set_high_threshold_raw(self.calculate_raw_threshold_value(lux))

    def set_low_threshold_lux(self, lux: float) -> None:
        """Set the ALS low threshold in lux, compensating where needed."""
        self.set_low_threshold_raw(self.calculate_raw_threshold_value(lux))

    def calculate_raw_threshold_value(self, lux: float) -> int:
        """Raw threshold for ``lux`` under the configured gain and integration time."""
        return calculate_raw_threshold_value(self._it, self._gain, lux)

    def enable_power_saving(self, psm: PowerSavingMode) -> None:
        """Enable power-saving mode ``psm``."""
        self._write_register(_Register.PSM, _PSM_EN | (_PSM_BITS[psm] << 1))

    def disable_power_saving(self) -> None:
        """Disable power-saving mode."""
        self._write_register(_Register.PSM, 0)

    def read_interrupt_status(self) -> InterruptStatus:
        """Read which thresholds have triggered an interrupt."""
        data = self._read_register(_Register.ALS_INT)
        return InterruptStatus(
            was_too_low=bool(data & _INT_TH_LOW),
            was_too_high=bool(data & _INT_TH_HIGH),
        )

    def read_raw(self) -> int:
        """Read the raw ALS measurement."""
        return self._read_register(_Register.ALS)

    def read_lux(self) -> float:
        """Read the ALS measurement converted to lux."""
        return self.convert_raw_als_to_lux(self._read_register(_Register.ALS))

    def convert_raw_als_to_lux(self, raw_als: int) -> float:
        """Convert a raw ALS value using the configured gain and integration time."""
        return convert_raw_als_to_lux(self._it, self._gain, raw_als)

    def read_white(self) -> int:
        """Read the white channel measurement."""
        return self._read_register(_Register.WHITE)

    def _set_config(self, config: int) -> None:
        self._write_register(_Register.ALS_CONF, config)
        self._config = config

    def _write_register(self, register: int, value: int) -> None:
        if not 0 <= value <= _U16_MAX:
            raise ValueError(f"register value out of range: {value}")
        payload = bytes((register, value & 0xFF, value >> 8))
        with _bus_errors():
            self._i2c.write(DEVICE_ADDRESS, payload)

    def _read_register(self, register: int) -> int:
        with _bus_errors():
            data = bytes(self._i2c.write_read(DEVICE_ADDRESS, bytes((register,)), 2))
        if len(data) < 2:
            raise Veml7700Error(f"short read from register {register:#04x}")
        return data[0] | (data[1] << 8)