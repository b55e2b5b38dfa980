"""Command that prints the THS8200 power-on register defaults."""

from __future__ import annotations

import argparse

from .registers import default_registers
from .report import print_registers


def main(argv: list[str] | None = None) -> int:
    """Print the default register set and return the exit status."""
    parser = argparse.ArgumentParser(
        prog="ths8200regs",
        description="Print the THS8200 register set holding its power-on defaults.",
    )
    parser.parse_args(argv)
    print_registers(default_registers())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())