"""Conversion between the THS8200 register image and :class:`Registers`, plus I2C access."""

from __future__ import annotations

from typing import Protocol

from .registers import (
    COEFFICIENT_NAMES,
    LINETYPE_COUNT,
    Registers,
)

REG_COUNT = 0x89 + 1

# Writable windows: 0x00-0x01 are reserved, 0x81 is skipped and
# 0x86-0x89 hold read-only data.
_WRITE_WINDOWS = ((0x03, 0x80), (0x82, 0x85))

# (name, MSB register); the fractional byte follows at MSB + 1.
_COEFFICIENT_REGISTERS = tuple(zip(COEFFICIENT_NAMES, range(0x04, 0x1A, 2)))

# (field, LSB register, register with the two MSBs, shift of the MSBs)
_DTG1_SPLIT = (
    ("y_blank", 0x1D, 0x23, 4),
    ("y_sync_lo", 0x1E, 0x23, 2),
    ("y_sync_hi", 0x1F, 0x23, 0),
    ("cbcr_blank", 0x20, 0x24, 4),
    ("cbcr_sync_lo", 0x21, 0x24, 2),
    ("cbcr_sync_hi", 0x22, 0x24, 0),
)

_DTG1_BYTES = (
    ("spec_a", 0x25),
    ("spec_b", 0x26),
    ("spec_c", 0x27),
    ("spec_d", 0x28),
    ("spec_d1", 0x29),
    ("spec_e", 0x2A),
    ("spec_k1", 0x31),
    ("cbar_size", 0x3C),
)

_CSM_BYTES = (
    ("clip_gy_lo", 0x41),
    ("clip_cb_lo", 0x42),
    ("clip_cr_lo", 0x43),
    ("clip_gy_hi", 0x44),
    ("clip_cb_hi", 0x45),
    ("clip_cr_hi", 0x46),
    ("shift_gy", 0x47),
    ("shift_cb", 0x48),
    ("shift_cr", 0x49),
    ("csm_ctrl", 0x4F),
)

_SYSTEM_FLAGS = (
    ("vesa_clk", 7),
    ("dll_bypass", 6),
    ("vesa_colorbars", 5),
    ("dll_freq_sel", 4),
    ("dac_pwdn", 3),
    ("chip_pwdn", 2),
    ("chip_ms", 1),
    ("arst_func_n", 0),
)

_DATAPATH_FLAGS = (
    ("clk656_on", 7),
    ("fsadj", 6),
    ("ifir12_bypass", 5),
    ("ifir35_bypass", 4),
    ("tristate656", 3),
)

_DTG2_CTRL_FLAGS = (
    ("fid_de", 7),
    ("rgb_mode", 6),
    ("emb_timing", 5),
    ("vsout_pol", 4),
    ("hsout_pol", 3),
    ("fid_pol", 2),
    ("vs_pol", 1),
    ("hs_pol", 0),
)

_BP_MSB_BASE = 0x50
_BP_LSB_BASE = 0x60
_LINETYPE_BASE = 0x68


class I2CBus(Protocol):
    """An I2C bus able to do burst register transfers; failures are raised."""

    def burst_read(self, addr: int, reg: int, size: int) -> bytes:
        """Read ``size`` bytes starting at register ``reg`` of device ``addr``."""

    def burst_write(self, addr: int, reg: int, data: bytes) -> None:
        """Write ``data`` starting at register ``reg`` of device ``addr``."""


def _bit(value: int, position: int) -> bool:
    return bool((value >> position) & 1)


def _signed8(value: int) -> int:
    return value - 0x100 if value & 0x80 else value


def _read_flags(target: object, value: int, flags: tuple[tuple[str, int], ...]) -> None:
    for name, position in flags:
        setattr(target, name, _bit(value, position))


def _pack_flags(source: object, flags: tuple[tuple[str, int], ...]) -> int:
    return sum(1 << position for name, position in flags if getattr(source, name))


def decode(data: bytes) -> Registers:
    """Build a :class:`Registers` from a full register image starting at 0x00."""
    b = bytes(data)
    if len(b) != REG_COUNT:
        raise ValueError(f"register image must be {REG_COUNT} bytes, got {len(b)}")
    r = Registers()

    r.system.version = b[0x02]
    _read_flags(r.system.ctl, b[0x03], _SYSTEM_FLAGS)

    for name, msb in _COEFFICIENT_REGISTERS:
        setattr(r.csc, f"{name}_int", _signed8(b[msb]))
        setattr(r.csc, f"{name}_frac", b[msb + 1])
    r.csc.csc_bypass = _bit(b[0x19], 1)
    r.csc.csc_uof = _bit(b[0x19], 0)

    r.test.digbypass = _bit(b[0x1A], 7)
    r.test.force_off = _bit(b[0x1A], 6)
    r.test.ydelay = (b[0x1B] >> 6) & 0x03
    r.test.fastramp = _bit(b[0x1B], 1)
    r.test.slowramp = _bit(b[0x1B], 0)

    _read_flags(r.datapath, b[0x1C], _DATAPATH_FLAGS)
    r.datapath.dman_cntl = b[0x1C] & 0x07

    dtg1 = r.dtg1
    for name, lsb, msb_reg, shift in _DTG1_SPLIT:
        setattr(dtg1, name, (((b[msb_reg] >> shift) & 0x03) << 8) | b[lsb])
    dtg1.dtg1_on = _bit(b[0x38], 7)
    dtg1.pass_thru = _bit(b[0x38], 4)
    dtg1.mode = b[0x38] & 0x0F
    for name, reg in _DTG1_BYTES:
        setattr(dtg1, name, b[reg])
    dtg1.spec_h = ((b[0x2B] & 0x03) << 8) | b[0x2C]
    dtg1.spec_i = ((b[0x2D] & 0x0F) << 8) | b[0x2E]
    dtg1.spec_k = ((b[0x30] & 0x07) << 8) | b[0x2F]
    dtg1.spec_g = ((b[0x33] & 0x0F) << 8) | b[0x32]
    dtg1.total_pixels = ((b[0x34] & 0x1F) << 8) | b[0x35]
    dtg1.field_flip = _bit(b[0x36], 7)
    dtg1.line_cnt = ((b[0x36] & 0x07) << 8) | b[0x37]
    dtg1.frame_size = (((b[0x39] >> 4) & 0x07) << 8) | b[0x3A]
    dtg1.field_size = ((b[0x39] & 0x07) << 8) | b[0x3B]

    t = b[0x3D]
    r.dac.i2c_cntl = _bit(t, 6)
    r.dac.dac1 = (((t >> 4) & 0x03) << 8) | b[0x3E]
    r.dac.dac2 = (((t >> 2) & 0x03) << 8) | b[0x3F]
    r.dac.dac3 = ((t & 0x03) << 8) | b[0x40]

    for name, reg in _CSM_BYTES:
        setattr(r.csm, name, b[reg])
    r.csm.mult_gy = (((b[0x4A] >> 5) & 0x07) << 8) | b[0x4C]
    r.csm.mult_cb = (((b[0x4B] >> 5) & 0x07) << 8) | b[0x4D]
    r.csm.mult_cr = ((b[0x4B] & 0x07) << 8) | b[0x4E]

    dtg2 = r.dtg2
    msbs = b[_BP_MSB_BASE:_BP_MSB_BASE + len(dtg2.bp)]
    lsbs = b[_BP_LSB_BASE:_BP_LSB_BASE + len(dtg2.bp)]
    dtg2.bp = [((msb & 0x03) << 8) | lsb for msb, lsb in zip(msbs, lsbs)]
    pairs = b[_LINETYPE_BASE:_LINETYPE_BASE + LINETYPE_COUNT // 2]
    dtg2.linetype = [code for v in pairs for code in (v >> 4, v & 0x0F)]
    dtg2.hlength = ((b[0x71] & 0x03) << 8) | b[0x70]
    dtg2.hdly = ((b[0x71] & 0x1F) << 8) | b[0x72]
    dtg2.vlength1 = ((b[0x74] & 0x03) << 8) | b[0x73]
    dtg2.vdly1 = ((b[0x74] & 0x07) << 8) | b[0x75]
    dtg2.vlength2 = ((b[0x77] & 0x03) << 8) | b[0x76]
    dtg2.vdly2 = ((b[0x77] >> 6) << 8) | b[0x78]
    dtg2.hs_in_dly = ((b[0x79] & 0x1F) << 8) | b[0x7A]
    dtg2.vs_in_dly = ((b[0x7B] & 0x07) << 8) | b[0x7C]
    dtg2.pixel_cnt = (b[0x7D] << 8) | b[0x7E]
    dtg2.ctrl.ip_fmt = _bit(b[0x7F], 7)
    dtg2.ctrl.line_cnt = ((b[0x7F] & 0x07) << 8) | b[0x80]
    _read_flags(dtg2.ctrl, b[0x82], _DTG2_CTRL_FLAGS)

    r.cgms.header = b[0x83] & 0x3F
    r.cgms.enable = False
    r.cgms.payload = ((b[0x84] & 0x3F) << 8) | b[0x85]

    r.readback.ppl = (b[0x86] << 8) | b[0x87]
    r.readback.lpf = (b[0x88] << 8) | b[0x89]
    return r


def encode(regs: Registers) -> bytes:
    """Return the full register image (0x00-0x89) for ``regs``; read-only bytes stay zero."""
    buf = bytearray(REG_COUNT)

    buf[0x02] = regs.system.version & 0xFF
    buf[0x03] = _pack_flags(regs.system.ctl, _SYSTEM_FLAGS)

    csc = regs.csc
    for name, msb in _COEFFICIENT_REGISTERS:
        buf[msb] = getattr(csc, f"{name}_int") & 0xFF
        buf[msb + 1] = getattr(csc, f"{name}_frac") & 0xFF
    # The control bits share register 0x19 with the last fractional byte.
    buf[0x19] = (0x02 if csc.csc_bypass else 0) | (0x01 if csc.csc_uof else 0)

    test = regs.test
    buf[0x1A] = (0x80 if test.digbypass else 0) | (0x40 if test.force_off else 0)
    buf[0x1B] = (
        ((test.ydelay & 0x03) << 6)
        | (0x02 if test.fastramp else 0)
        | (0x01 if test.slowramp else 0)
    )

    buf[0x1C] = _pack_flags(regs.datapath, _DATAPATH_FLAGS) | (regs.datapath.dman_cntl & 0x07)

    dtg1 = regs.dtg1
    for name, lsb, msb_reg, shift in _DTG1_SPLIT:
        value = getattr(dtg1, name)
        buf[lsb] = value & 0xFF
        buf[msb_reg] |= ((value >> 8) & 0x03) << shift
    for name, reg in _DTG1_BYTES:
        buf[reg] = getattr(dtg1, name) & 0xFF
    buf[0x2B] = (dtg1.spec_h >> 8) & 0x03
    buf[0x2C] = dtg1.spec_h & 0xFF
    buf[0x2D] = (dtg1.spec_i >> 8) & 0x0F
    buf[0x2E] = dtg1.spec_i & 0xFF
    buf[0x2F] = dtg1.spec_k & 0xFF
    buf[0x30] = (dtg1.spec_k >> 8) & 0x07
    buf[0x32] = dtg1.spec_g & 0xFF
    buf[0x33] = (dtg1.spec_g >> 8) & 0x0F
    buf[0x34] = (dtg1.total_pixels >> 8) & 0x1F
    buf[0x35] = dtg1.total_pixels & 0xFF
    buf[0x36] = (0x80 if dtg1.field_flip else 0) | ((dtg1.line_cnt >> 8) & 0x07)
    buf[0x37] = dtg1.line_cnt & 0xFF
    buf[0x38] = (
        (0x80 if dtg1.dtg1_on else 0)
        | (0x10 if dtg1.pass_thru else 0)
        | (dtg1.mode & 0x0F)
    )
    buf[0x39] = (((dtg1.frame_size >> 8) & 0x07) << 4) | ((dtg1.field_size >> 8) & 0x07)
    buf[0x3A] = dtg1.frame_size & 0xFF
    buf[0x3B] = dtg1.field_size & 0xFF

    dac = regs.dac
    buf[0x3D] = (
        (0x40 if dac.i2c_cntl else 0)
        | (((dac.dac1 >> 8) & 0x03) << 4)
        | (((dac.dac2 >> 8) & 0x03) << 2)
        | ((dac.dac3 >> 8) & 0x03)
    )
    buf[0x3E] = dac.dac1 & 0xFF
    buf[0x3F] = dac.dac2 & 0xFF
    buf[0x40] = dac.dac3 & 0xFF

    csm = regs.csm
    for name, reg in _CSM_BYTES:
        buf[reg] = getattr(csm, name) & 0xFF
    buf[0x4A] = ((csm.mult_gy >> 8) & 0x07) << 5
    buf[0x4B] = (((csm.mult_cb >> 8) & 0x07) << 5) | ((csm.mult_cr >> 8) & 0x07)
    buf[0x4C] = csm.mult_gy & 0xFF
    buf[0x4D] = csm.mult_cb & 0xFF
    buf[0x4E] = csm.mult_cr & 0xFF

    dtg2 = regs.dtg2
    for offset, bp in enumerate(dtg2.bp):
        buf[_BP_MSB_BASE + offset] = (bp >> 8) & 0x03
        buf[_BP_LSB_BASE + offset] = bp & 0xFF
    codes = iter(dtg2.linetype)
    for offset, (high, low) in enumerate(zip(codes, codes)):
        buf[_LINETYPE_BASE + offset] = ((high & 0x0F) << 4) | (low & 0x0F)
    buf[0x70] = dtg2.hlength & 0xFF
    buf[0x71] = ((dtg2.hdly >> 8) & 0x1F) | ((dtg2.hlength >> 8) & 0x03)
    buf[0x72] = dtg2.hdly & 0xFF
    buf[0x73] = dtg2.vlength1 & 0xFF
    buf[0x74] = ((dtg2.vdly1 >> 8) & 0x07) | ((dtg2.vlength1 >> 8) & 0x03)
    buf[0x75] = dtg2.vdly1 & 0xFF
    buf[0x76] = dtg2.vlength2 & 0xFF
    buf[0x77] = (((dtg2.vdly2 >> 8) & 0x03) << 6) | ((dtg2.vlength2 >> 8) & 0x03)
    buf[0x78] = dtg2.vdly2 & 0xFF
    buf[0x79] = (dtg2.hs_in_dly >> 8) & 0x1F
    buf[0x7A] = dtg2.hs_in_dly & 0xFF
    buf[0x7B] = (dtg2.vs_in_dly >> 8) & 0x07
    buf[0x7C] = dtg2.vs_in_dly & 0xFF
    buf[0x7D] = (dtg2.pixel_cnt >> 8) & 0xFF
    buf[0x7E] = dtg2.pixel_cnt & 0xFF
    buf[0x7F] = (0x80 if dtg2.ctrl.ip_fmt else 0) | ((dtg2.ctrl.line_cnt >> 8) & 0x07)
    buf[0x80] = dtg2.ctrl.line_cnt & 0xFF
    buf[0x82] = _pack_flags(dtg2.ctrl, _DTG2_CTRL_FLAGS)

    buf[0x83] = regs.cgms.header & 0x3F
    buf[0x84] = (regs.cgms.payload >> 8) & 0x3F
    buf[0x85] = regs.cgms.payload & 0xFF

    return bytes(buf)


def read_registers(bus: I2CBus, addr: int) -> Registers:
    """Read the whole register set of the device at ``addr``."""
    data = bus.burst_read(addr, 0x00, REG_COUNT)
    return decode(data)


def write_registers(bus: I2CBus, addr: int, regs: Registers) -> None:
    """Program every writable register of the device at ``addr`` from ``regs``."""
    image = encode(regs)
    for first, last in _WRITE_WINDOWS:
        bus.burst_write(addr, first, image[first:last + 1])