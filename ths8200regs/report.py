"""Human-readable dump of a THS8200 register set."""

from __future__ import annotations

import sys
from typing import TextIO

from .registers import COEFFICIENT_NAMES, Registers


def _flag(name: str, value: bool) -> str:
    """Render one boolean field as ``name=true`` or ``name=false``."""
    return f"{name}={'true' if value else 'false'}"


def _flags(source: object, names: tuple[str, ...]) -> str:
    return " ".join(_flag(name, getattr(source, name)) for name in names)


def format_registers(regs: Registers) -> str:
    """Return the register dump as text, one item per line."""
    ctl = regs.system.ctl
    csc = regs.csc
    test = regs.test
    dp = regs.datapath
    d1 = regs.dtg1
    dac = regs.dac
    csm = regs.csm
    d2 = regs.dtg2
    c2 = d2.ctrl

    lines = [
        f"System.version: 0x{regs.system.version:02X}",
        " System ctl: "
        + _flags(
            ctl,
            (
                "vesa_clk",
                "dll_bypass",
                "vesa_colorbars",
                "dll_freq_sel",
                "dac_pwdn",
                "chip_pwdn",
                "chip_ms",
                "arst_func_n",
            ),
        ),
        "CSC:",
    ]
    lines.extend(f" {name} = {csc.coefficient(name):.3f}" for name in COEFFICIENT_NAMES)
    lines.append(" " + _flags(csc, ("csc_bypass", "csc_uof")))
    lines.append(
        "Test: "
        + _flags(test, ("digbypass", "force_off"))
        + f" ydelay={test.ydelay} "
        + _flags(test, ("fastramp", "slowramp"))
    )
    lines.append(
        "Datapath: "
        + _flags(dp, ("clk656_on", "fsadj", "ifir12_bypass", "ifir35_bypass", "tristate656"))
        + f" dman_cntl=0x{dp.dman_cntl:X}"
    )
    lines += [
        "DTG1:",
        f" y_blank={d1.y_blank} y_sync_lo={d1.y_sync_lo} y_sync_hi={d1.y_sync_hi}",
        f" cbcr_blank={d1.cbcr_blank} cbcr_sync_lo={d1.cbcr_sync_lo} "
        f"cbcr_sync_hi={d1.cbcr_sync_hi}",
        " " + _flags(d1, ("dtg1_on", "pass_thru")) + f" mode=0x{d1.mode:X}",
        f" spec_a={d1.spec_a} spec_b={d1.spec_b} spec_c={d1.spec_c} spec_d={d1.spec_d} "
        f"spec_d1={d1.spec_d1} spec_e={d1.spec_e}",
        f" spec_h={d1.spec_h} spec_i={d1.spec_i} spec_k={d1.spec_k} spec_k1={d1.spec_k1}",
        f" spec_g={d1.spec_g} total_pixels={d1.total_pixels} "
        + _flag("field_flip", d1.field_flip)
        + f" line_cnt={d1.line_cnt}",
        f" frame_size={d1.frame_size} field_size={d1.field_size} cbar_size={d1.cbar_size}",
        "DAC: "
        + _flag("i2c_cntl", dac.i2c_cntl)
        + f" dac1={dac.dac1} dac2={dac.dac2} dac3={dac.dac3}",
        "CSM:",
        f" clip_gy_lo={csm.clip_gy_lo} clip_cb_lo={csm.clip_cb_lo} clip_cr_lo={csm.clip_cr_lo}",
        f" clip_gy_hi={csm.clip_gy_hi} clip_cb_hi={csm.clip_cb_hi} clip_cr_hi={csm.clip_cr_hi}",
        f" shift_gy={csm.shift_gy} shift_cb={csm.shift_cb} shift_cr={csm.shift_cr}",
        f" mult_gy={csm.mult_gy} mult_cb={csm.mult_cb} mult_cr={csm.mult_cr} "
        f"csm_ctrl=0x{csm.csm_ctrl:02X}",
        "DTG2 breakpoints:",
    ]
    lines.extend(f"  bp[{i}]={bp}" for i, bp in enumerate(d2.bp))
    lines.extend(f"  linetype[{i}]=0x{code:X}" for i, code in enumerate(d2.linetype))
    lines += [
        f"DTG2 timing: hlength={d2.hlength} hdly={d2.hdly} vlength1={d2.vlength1} "
        f"vdly1={d2.vdly1} vlength2={d2.vlength2} vdly2={d2.vdly2}",
        f" hs_in_dly={d2.hs_in_dly} vs_in_dly={d2.vs_in_dly} pixel_cnt={d2.pixel_cnt}",
        " "
        + _flag("ip_fmt", c2.ip_fmt)
        + f" line_cnt={c2.line_cnt} "
        + _flags(
            c2,
            (
                "fid_de",
                "rgb_mode",
                "emb_timing",
                "vsout_pol",
                "hsout_pol",
                "fid_pol",
                "vs_pol",
                "hs_pol",
            ),
        ),
        f"CGMS: header=0x{regs.cgms.header:02X} payload={regs.cgms.payload}",
        f"Readback: ppl={regs.readback.ppl} lpf={regs.readback.lpf}",
    ]
    return "\n".join(lines) + "\n"


def print_registers(regs: Registers, file: TextIO | None = None) -> None:
    """Write the register dump to ``file`` (standard output by default)."""
    (file if file is not None else sys.stdout).write(format_registers(regs))