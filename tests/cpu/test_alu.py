"""Tests for the stateless LS-8 ALU."""

from __future__ import annotations

import pytest

from pyls8.cpu import CPUError, alu


def test_add_and_mul_match_modulo_arithmetic_for_all_bytes() -> None:
    for a in range(0x100):
        for b in range(0x100):
            assert alu.apply("ADD", a, b) == (a + b) % 256
            assert alu.apply("MUL", a, b) == (a * b) % 256


def test_results_stay_in_byte_range() -> None:
    assert alu.apply("ADD", 0xFF, 0x01) == 0x00
    assert alu.apply("MUL", 0xFF, 0xFF) == 0x01


def test_unknown_operation_raises() -> None:
    with pytest.raises(CPUError):
        alu.apply("DIV", 4, 2)


def test_operation_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        alu.ALU_OPERATIONS["SUB"] = lambda a, b: (a - b) & 0xFF  # type: ignore[index]
