# veml7700

A driver for the VEML7700 high-accuracy ambient light sensor. It talks to the
sensor through an I2C bus object that you supply, so it works with whatever
bus library your platform provides.

With it you can:

- enable and disable the device;
- read the ambient light level in lux, in raw counts, or from the white channel;
- set the gain, integration time and fault count;
- turn power-saving mode on and off and pick its mode;
- enable and disable interrupts, set the high and low thresholds in lux or raw
  counts, and read the interrupt status;
- convert raw readings to lux, and lux thresholds to raw values, ahead of time.

For lux values above 1000 lx at gain 1/4 or 1/8 the sensor's published
correction polynomial is applied. The same polynomial is inverted when lux
thresholds above 1000 lx are converted to raw values at those gains.

## Installation

```
pip install veml7700
```

## The package

- `veml7700.types`: the enums `IntegrationTime`, `Gain`, `FaultCount` and
  `PowerSavingMode`, and the `InterruptStatus` dataclass with the fields
  `was_too_low` and `was_too_high`.
- `veml7700.correction`: `get_lux_raw_conversion_factor`,
  `correct_high_lux`, `inverse_high_lux_correction`,
  `needs_high_lux_correction` and `calculate_raw_threshold_value`.
- `veml7700.device`: the `Veml7700` driver, the `I2CBus` protocol, the
  `Veml7700Error` exception and the `convert_raw_als_to_lux` function.

## The I2C bus

`Veml7700` takes an object with the two methods described by `I2CBus`:

- `write(address, data)` sends the bytes `data` to the 7-bit `address`;
- `write_read(address, data, read_length)` sends `data`, then reads
  `read_length` bytes and returns them.

The sensor is addressed at `0x10`. Registers are 16 bits wide and sent low
byte first.

Any exception the bus raises is wrapped in `Veml7700Error`. A read that
returns fewer than two bytes also raises `Veml7700Error`. Writing a value
outside 0 to 0xFFFF to a register raises `ValueError`.

## Usage

```python
from veml7700.device import Veml7700, Veml7700Error
from veml7700.types import FaultCount, Gain, IntegrationTime, PowerSavingMode

sensor = Veml7700(bus)          # bus: your I2C bus object

sensor.set_gain(Gain.ONE_QUARTER)
sensor.set_integration_time(IntegrationTime.MS_200)
sensor.set_high_threshold_lux(10000.0)
sensor.set_low_threshold_lux(100.0)
sensor.set_fault_count(FaultCount.FOUR)
sensor.enable_interrupts()
sensor.enable_power_saving(PowerSavingMode.ONE)
sensor.enable()                 # wait about 4 ms before the first reading

white = sensor.read_white()
lux = sensor.read_lux()
status = sensor.read_interrupt_status()
if status.was_too_high:
    print("too bright")
if status.was_too_low:
    print("too dark")

bus = sensor.destroy()          # hand the bus back
```

A new `Veml7700` assumes the device is shut down, with gain 1 and 100 ms
integration time; nothing is written to the bus until you configure it. The
`gain` and `integration_time` properties report what was last set, and the
lux conversions and lux thresholds use them. Set the gain and integration
time before setting thresholds in lux.

### Conversions without a device

```python
from veml7700.correction import calculate_raw_threshold_value
from veml7700.device import convert_raw_als_to_lux
from veml7700.types import Gain, IntegrationTime

lux = convert_raw_als_to_lux(IntegrationTime.MS_100, Gain.ONE, 1000)
raw = calculate_raw_threshold_value(IntegrationTime.MS_200, Gain.ONE_QUARTER, 5000.0)
```

`calculate_raw_threshold_value` truncates its result to a whole number and
clamps it to the range 0 to 0xFFFF.

`IntegrationTime` members also report their length through `as_ms()` and
`as_us()`.

## What the package does not do

It has no I2C bus of its own and no command-line tool: you supply the bus
object, and the driver only reads and writes the sensor's registers through
it. It does not wait after `enable()`, and it does not read the configuration
back from the device.

## Running the tests

```
pip install veml7700[test]
pytest
```