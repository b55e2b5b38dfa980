import pytest

from ths8200regs.cli import main
from ths8200regs.registers import default_registers
from ths8200regs.report import format_registers


def test_main_prints_defaults(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == format_registers(default_registers())


def test_main_output_starts_with_version(capsys):
    main([])
    out = capsys.readouterr().out
    assert out.startswith("System.version: 0x00\n")
    assert "arst_func_n=true" in out


def test_main_rejects_unknown_arguments():
    with pytest.raises(SystemExit) as excinfo:
        main(["--bogus"])
    assert excinfo.value.code == 2