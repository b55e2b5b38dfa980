# ths8200regs

A Python model of the register map of the THS8200 video DAC. Each
register field is a plain attribute on a nested dataclass. A field that
spans an MSB/LSB register pair is stored as a single integer. The
package provides:

- `ths8200regs.registers`: the dataclasses (`Registers`, `System`,
  `SystemControl`, `ColorSpaceConversion`, `TestControl`, `DataPath`,
  `Dtg1`, `Dac`, `ClipScaleMultiplier`, `Dtg2`, `Dtg2Control`, `Cgms`,
  `Readback`) and `default_registers()`, which returns the power-on
  defaults from the datasheet. A plain `Registers()` has every field
  cleared.
- `ths8200regs.codec`: `decode(data)` turns a raw image of registers
  0x00–0x89 (exactly 0x8A bytes) into a `Registers`. `encode(regs)`
  turns a `Registers` back into a raw image. `read_registers(bus, addr)`
  and `write_registers(bus, addr, regs)` transfer the registers through
  an `I2CBus`.
- `ths8200regs.report`: `format_registers(regs)` returns a readable dump
  of every field. `print_registers(regs, file=None)` writes that dump to
  `file`, or to standard output if no file is given.
- `ths8200regs.cli`: the `ths8200regs` command.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

## Command line

```
ths8200regs
```

Prints the power-on default register set. The command takes no options
other than `--help`.

## Library use

```python
from ths8200regs.registers import default_registers
from ths8200regs.codec import encode, decode
from ths8200regs.report import print_registers

regs = default_registers()
regs.dtg1.total_pixels = 2200
raw = encode(regs)          # 0x8A bytes, one per register
again = decode(raw)
print_registers(again)
```

`decode` raises `ValueError` if the image is not exactly 0x8A bytes
long.

### Colour space conversion

Each colour space conversion coefficient and offset is held in Q2.8
form, as two fields:

- a signed integer part, for example `r2g_int`;
- an unsigned fractional byte, for example `r2g_frac`.

`ColorSpaceConversion.coefficient("r2g")` returns the integer part plus
the fractional byte divided by 256, as a float. An unknown name raises
`ValueError`.

Register 0x19 holds both the fractional byte of `cboff` and the
`csc_bypass` and `csc_uof` bits. When encoding, the two bits overwrite
that byte. When decoding, `cboff_frac` and the two bits all come from
register 0x19.

### Talking to hardware

`I2CBus` is a protocol. Supply any object that has these two methods:

- `burst_read(addr, reg, size)` returns `size` bytes, starting at
  register `reg` of the device at `addr`;
- `burst_write(addr, reg, data)` writes `data`, starting at register
  `reg`.

The bus reports a failure by raising an exception. `read_registers`
reads 0x8A bytes starting at register 0x00.

`write_registers` makes two burst writes: registers 0x03–0x80, then
registers 0x82–0x85. It does not write registers 0x00–0x02 or 0x81. It
also does not write the read-only registers 0x86–0x89, which hold the
`Readback` counts.

After a decode, `Cgms.enable` is always `False`.

## What it does not do

The package has no I2C driver of its own. You supply the bus object.
The `ths8200regs` command prints only the built-in defaults. It cannot
read from a device or write to one.

## Tests

```
pytest
```