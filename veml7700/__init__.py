"""Driver for the VEML7700 ambient light sensor: types, lux correction and the I2C device driver."""

__version__ = "0.3.1"
__all__ = ["correction", "device", "types"]