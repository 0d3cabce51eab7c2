"""Baseline tests ensuring the package layout loads correctly."""

import pyls8


def test_package_exports() -> None:
    for name in ("cpu", "bus", "timing", "loader", "system", "utils"):
        assert hasattr(pyls8, name), f"missing submodule: {name}"


def test_cpu_exports() -> None:
    from pyls8 import cpu

    for name in ("LS8", "CPUState", "Flags", "CPUError", "IllegalOpcodeError", "alu", "opcodes"):
        assert hasattr(cpu, name), f"cpu missing symbol: {name}"
