import pytest

from ths8200regs.codec import (
    REG_COUNT,
    decode,
    encode,
    read_registers,
    write_registers,
)
from ths8200regs.registers import Registers, default_registers


class FakeBus:
    def __init__(self, image=None, fail_on_write=None):
        self.image = image
        self.reads = []
        self.writes = []
        self.fail_on_write = fail_on_write

    def burst_read(self, addr, reg, size):
        self.reads.append((addr, reg, size))
        return self.image

    def burst_write(self, addr, reg, data):
        if self.fail_on_write == reg:
            raise OSError("bus error")
        self.writes.append((addr, reg, bytes(data)))


def sample_registers():
    r = Registers()
    r.system.version = 0x21
    r.system.ctl.vesa_clk = True
    r.system.ctl.dac_pwdn = True
    r.system.ctl.chip_ms = True
    r.csc.r2r_int, r.csc.r2r_frac = 1, 0x40
    r.csc.g2g_int, r.csc.g2g_frac = -3, 0xEE
    r.csc.b2b_int, r.csc.b2b_frac = -128, 0x7F
    r.csc.yoff_int, r.csc.yoff_frac = 2, 0x10
    r.csc.cboff_int, r.csc.cboff_frac = -1, 0x01
    r.csc.csc_uof = True
    r.test.digbypass = True
    r.test.ydelay = 2
    r.test.slowramp = True
    r.datapath.fsadj = True
    r.datapath.tristate656 = True
    r.datapath.dman_cntl = 5
    d1 = r.dtg1
    d1.y_blank, d1.y_sync_lo, d1.y_sync_hi = 0x2AB, 0x155, 0x3FE
    d1.cbcr_blank, d1.cbcr_sync_lo, d1.cbcr_sync_hi = 0x101, 0x0FF, 0x200
    d1.dtg1_on, d1.pass_thru, d1.mode = True, True, 0x9
    d1.spec_a, d1.spec_b, d1.spec_c = 1, 2, 3
    d1.spec_d, d1.spec_d1, d1.spec_e = 4, 5, 6
    d1.spec_h, d1.spec_i, d1.spec_k, d1.spec_k1 = 0x2F0, 0xABC, 0x5A5, 7
    d1.spec_g, d1.total_pixels = 0xF00, 0x1ABC
    d1.field_flip, d1.line_cnt = True, 0x7FF
    d1.frame_size, d1.field_size, d1.cbar_size = 0x4CD, 0x321, 0x40
    r.dac.i2c_cntl = True
    r.dac.dac1, r.dac.dac2, r.dac.dac3 = 0x3FF, 0x155, 0x2AA
    c = r.csm
    c.clip_gy_lo, c.clip_cb_lo, c.clip_cr_lo = 10, 11, 12
    c.clip_gy_hi, c.clip_cb_hi, c.clip_cr_hi = 240, 241, 242
    c.shift_gy, c.shift_cb, c.shift_cr = 3, 4, 5
    c.mult_gy, c.mult_cb, c.mult_cr, c.csm_ctrl = 0x7FF, 0x456, 0x123, 0x3C
    d2 = r.dtg2
    d2.bp = [i * 0x41 for i in range(16)]
    d2.linetype = [(i * 7) % 16 for i in range(16)]
    d2.hlength, d2.hdly = 0xFF, 0x80
    d2.vlength1, d2.vdly1 = 0xAA, 0x55
    d2.vlength2, d2.vdly2 = 0x1FF, 0x2EE
    d2.hs_in_dly, d2.vs_in_dly, d2.pixel_cnt = 0x1ABC, 0x6CD, 0xBEEF
    d2.ctrl.ip_fmt, d2.ctrl.line_cnt = True, 0x5A5
    d2.ctrl.fid_de, d2.ctrl.emb_timing, d2.ctrl.hs_pol = True, True, True
    r.cgms.header, r.cgms.payload = 0x2A, 0x3ABC
    return r


def test_encode_has_full_length():
    assert len(encode(default_registers())) == REG_COUNT


def test_decode_of_zero_image_is_cleared_registers():
    assert decode(bytes(REG_COUNT)) == Registers()


def test_encode_of_cleared_registers_is_zero_image():
    assert encode(Registers()) == bytes(REG_COUNT)


def test_decode_rejects_wrong_length():
    with pytest.raises(ValueError):
        decode(bytes(REG_COUNT - 1))


def test_default_round_trip_shares_register_0x19():
    expected = default_registers()
    # The bypass bits overlay the cboff fractional byte at 0x19.
    expected.csc.cboff_frac = 0x02
    assert decode(encode(default_registers())) == expected


def test_default_wire_bytes():
    image = encode(default_registers())
    assert image[0x03] == 0x01
    assert image[0x1C] == 0x03
    assert image[0x19] == 0x02
    assert image[0x3C] == 0x80


def test_negative_coefficient_encodes_as_twos_complement():
    regs = Registers()
    regs.csc.r2g_int = -128
    assert encode(regs)[0x06] == 0x80
    assert decode(encode(regs)).csc.r2g_int == -128


def test_decode_all_ones():
    regs = decode(bytes([0xFF]) * REG_COUNT)
    assert regs.csc.r2r_int == -1
    assert regs.dtg1.y_blank == 0x3FF
    assert regs.dtg2.linetype == [0x0F] * 16
    assert regs.cgms.enable is False
    assert regs.readback.ppl == regs.readback.lpf


def test_readback_is_not_encoded():
    regs = Registers()
    regs.readback.ppl = 1234
    regs.readback.lpf = 567
    assert encode(regs)[0x86:] == bytes(4)


def test_read_registers_short_read_raises():
    bus = FakeBus(image=bytes(10))
    with pytest.raises(ValueError):
        read_registers(bus, 0x20)


def test_write_registers_skips_reserved_and_readback():
    regs = sample_registers()
    image = encode(regs)
    bus = FakeBus()
    write_registers(bus, 0x21, regs)
    assert bus.writes == [
        (0x21, 0x03, image[0x03:0x81]),
        (0x21, 0x82, image[0x82:0x86]),
    ]


def test_write_registers_stops_on_first_failure():
    bus = FakeBus(fail_on_write=0x03)
    with pytest.raises(OSError):
        write_registers(bus, 0x21, default_registers())
    assert bus.writes == []