"""Register map of the THS8200 video DAC as nested dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

BREAKPOINT_COUNT = 16
LINETYPE_COUNT = 16

COEFFICIENT_NAMES = (
    "r2r",
    "r2g",
    "r2b",
    "g2r",
    "g2g",
    "g2b",
    "b2r",
    "b2g",
    "b2b",
    "yoff",
    "cboff",
)


@dataclass
class SystemControl:
    """Register 0x03: system control bits."""

    vesa_clk: bool = False
    dll_bypass: bool = False
    vesa_colorbars: bool = False
    dll_freq_sel: bool = False
    dac_pwdn: bool = False
    chip_pwdn: bool = False
    chip_ms: bool = False
    arst_func_n: bool = False


@dataclass
class System:
    """Registers 0x02-0x03: device version and system control."""

    version: int = 0
    ctl: SystemControl = field(default_factory=SystemControl)


@dataclass
class ColorSpaceConversion:
    """Registers 0x04-0x19: Q2.8 colour space conversion coefficients and offsets."""

    r2r_int: int = 0
    r2r_frac: int = 0
    r2g_int: int = 0
    r2g_frac: int = 0
    r2b_int: int = 0
    r2b_frac: int = 0
    g2r_int: int = 0
    g2r_frac: int = 0
    g2g_int: int = 0
    g2g_frac: int = 0
    g2b_int: int = 0
    g2b_frac: int = 0
    b2r_int: int = 0
    b2r_frac: int = 0
    b2g_int: int = 0
    b2g_frac: int = 0
    b2b_int: int = 0
    b2b_frac: int = 0
    yoff_int: int = 0
    yoff_frac: int = 0
    cboff_int: int = 0
    cboff_frac: int = 0
    csc_bypass: bool = False
    csc_uof: bool = False

    def coefficient(self, name: str) -> float:
        """Return the named coefficient or offset as integer part plus fraction/256."""
        if name not in COEFFICIENT_NAMES:
            raise ValueError(f"unknown CSC coefficient: {name!r}")
        integer = getattr(self, f"{name}_int")
        fraction = getattr(self, f"{name}_frac")
        return integer + fraction / 256.0


@dataclass
class TestControl:
    """Registers 0x1A-0x1B: test control."""

    __test__ = False

    digbypass: bool = False
    force_off: bool = False
    ydelay: int = 0
    fastramp: bool = False
    slowramp: bool = False


@dataclass
class DataPath:
    """Register 0x1C: data path control."""

    clk656_on: bool = False
    fsadj: bool = False
    ifir12_bypass: bool = False
    ifir35_bypass: bool = False
    tristate656: bool = False
    dman_cntl: int = 0


@dataclass
class Dtg1:
    """Registers 0x1D-0x3C: display timing generator, part 1."""

    y_blank: int = 0
    y_sync_lo: int = 0
    y_sync_hi: int = 0
    cbcr_blank: int = 0
    cbcr_sync_lo: int = 0
    cbcr_sync_hi: int = 0
    dtg1_on: bool = False
    pass_thru: bool = False
    mode: int = 0
    spec_a: int = 0
    spec_b: int = 0
    spec_c: int = 0
    spec_d: int = 0
    spec_d1: int = 0
    spec_e: int = 0
    spec_h: int = 0
    spec_i: int = 0
    spec_k: int = 0
    spec_k1: int = 0
    spec_g: int = 0
    total_pixels: int = 0
    field_flip: bool = False
    line_cnt: int = 0
    frame_size: int = 0
    field_size: int = 0
    cbar_size: int = 0


@dataclass
class Dac:
    """Registers 0x3D-0x40: DAC control."""

    i2c_cntl: bool = False
    dac1: int = 0
    dac2: int = 0
    dac3: int = 0


@dataclass
class ClipScaleMultiplier:
    """Registers 0x41-0x4F: clip, shift and multiplier settings."""

    clip_gy_lo: int = 0
    clip_cb_lo: int = 0
    clip_cr_lo: int = 0
    clip_gy_hi: int = 0
    clip_cb_hi: int = 0
    clip_cr_hi: int = 0
    shift_gy: int = 0
    shift_cb: int = 0
    shift_cr: int = 0
    mult_gy: int = 0
    mult_cb: int = 0
    mult_cr: int = 0
    csm_ctrl: int = 0


@dataclass
class Dtg2Control:
    """Registers 0x7F-0x82: DTG2 line counter and sync polarity control."""

    ip_fmt: bool = False
    line_cnt: int = 0
    fid_de: bool = False
    rgb_mode: bool = False
    emb_timing: bool = False
    vsout_pol: bool = False
    hsout_pol: bool = False
    fid_pol: bool = False
    vs_pol: bool = False
    hs_pol: bool = False


@dataclass
class Dtg2:
    """Registers 0x50-0x82: display timing generator, part 2."""

    bp: list[int] = field(default_factory=lambda: [0] * BREAKPOINT_COUNT)
    linetype: list[int] = field(default_factory=lambda: [0] * LINETYPE_COUNT)
    hlength: int = 0
    hdly: int = 0
    vlength1: int = 0
    vdly1: int = 0
    vlength2: int = 0
    vdly2: int = 0
    hs_in_dly: int = 0
    vs_in_dly: int = 0
    pixel_cnt: int = 0
    ctrl: Dtg2Control = field(default_factory=Dtg2Control)


@dataclass
class Cgms:
    """Registers 0x83-0x85: CGMS control."""

    enable: bool = False
    header: int = 0
    payload: int = 0


@dataclass
class Readback:
    """Registers 0x86-0x89: read-only pixel and line counts."""

    ppl: int = 0
    lpf: int = 0


@dataclass
class Registers:
    """The complete THS8200 register set; every field starts cleared."""

    system: System = field(default_factory=System)
    csc: ColorSpaceConversion = field(default_factory=ColorSpaceConversion)
    test: TestControl = field(default_factory=TestControl)
    datapath: DataPath = field(default_factory=DataPath)
    dtg1: Dtg1 = field(default_factory=Dtg1)
    dac: Dac = field(default_factory=Dac)
    csm: ClipScaleMultiplier = field(default_factory=ClipScaleMultiplier)
    dtg2: Dtg2 = field(default_factory=Dtg2)
    cgms: Cgms = field(default_factory=Cgms)
    readback: Readback = field(default_factory=Readback)


def default_registers() -> Registers:
    """Return a register set holding the device's power-on defaults."""
    regs = Registers()

    regs.system.ctl.arst_func_n = True

    regs.datapath.dman_cntl = 0x03

    csc = regs.csc
    csc.r2r_int, csc.r2r_frac = 0x00, 0xDA
    csc.r2g_int, csc.r2g_frac = -128, 0x78
    csc.r2b_int, csc.r2b_frac = 0x02, 0x0C
    csc.g2r_int, csc.g2r_frac = 0x02, 0xDC
    csc.g2g_int, csc.g2g_frac = -127, 0x94
    csc.g2b_int, csc.g2b_frac = -127, 0xDC
    csc.b2r_int, csc.b2r_frac = 0x00, 0x4A
    csc.b2g_int, csc.b2g_frac = 0x02, 0x0C
    csc.b2b_int, csc.b2b_frac = -128, 0x30
    csc.yoff_int, csc.yoff_frac = 0x00, 0x08
    csc.cboff_int, csc.cboff_frac = 0x02, 0x00
    csc.csc_bypass = True

    dtg1 = regs.dtg1
    dtg1.y_blank = 0x200
    dtg1.y_sync_hi = 0x300
    dtg1.cbcr_blank = 0x200
    dtg1.cbcr_sync_hi = 0x300
    dtg1.cbar_size = 0x80

    dtg2 = regs.dtg2
    dtg2.hlength = 0x60
    dtg2.hdly = 0x20
    dtg2.vlength1 = 0x03
    dtg2.vdly2 = 0x3FF
    dtg2.hs_in_dly = 0x3D
    dtg2.vs_in_dly = 0x03
    dtg2.ctrl.rgb_mode = True
    dtg2.ctrl.vsout_pol = True
    dtg2.ctrl.hsout_pol = True
    dtg2.ctrl.fid_pol = True
    dtg2.ctrl.vs_pol = True
    dtg2.ctrl.hs_pol = True

    return regs