"""Tests for the LS-8 fetch/decode/execute cycle and instruction handlers."""

from __future__ import annotations

from typing import Sequence

import pytest

from pyls8.bus import Memory, MemoryError
from pyls8.cpu import LS8, IllegalOpcodeError, OperandError, StackError
from pyls8.cpu.opcodes import (
    ADD,
    CALL,
    CMP,
    HLT,
    JEQ,
    JMP,
    JNE,
    LDI,
    MUL,
    NOP,
    POP,
    PRA,
    PRN,
    PUSH,
    RET,
    ST,
)
from pyls8.cpu.state import IM, IS, SP, STACK_START


def make_cpu(program: Sequence[int] = (), *, length: int = 0x100) -> tuple[LS8, Memory, list[str]]:
    memory = Memory(0x00, length)
    output: list[str] = []
    cpu = LS8(memory, output=output.append)
    for address, value in enumerate(program):
        cpu.poke(address, value)
    return cpu, memory, output


def run_until_halt(cpu: LS8, max_ticks: int = 1_000) -> None:
    for _ in range(max_ticks):
        if cpu.halted:
            return
        cpu.tick()
    raise AssertionError("program did not halt")


def test_initial_register_file() -> None:
    cpu, _, _ = make_cpu()

    assert cpu.state.registers == [0, 0, 0, 0, 0, 0, 0, STACK_START]
    assert cpu.state.pc == 0
    assert cpu.state.ir == 0
    assert cpu.state.flags.interrupts_enabled is True
    assert cpu.state.flags.equal is None
    assert cpu.halted is False


def test_nop_advances_pc_by_one() -> None:
    cpu, _, _ = make_cpu([NOP, NOP])

    cpu.tick()

    assert cpu.state.pc == 1
    assert cpu.state.ir == NOP


def test_ldi_loads_immediate() -> None:
    cpu, _, _ = make_cpu([LDI, 3, 0x2A])

    cpu.tick()

    assert cpu.state.registers[3] == 0x2A
    assert cpu.state.pc == 3


def test_multiply_program_prints_72_and_halts() -> None:
    cpu, _, output = make_cpu([LDI, 0, 8, LDI, 1, 9, MUL, 0, 1, PRN, 0, HLT])

    run_until_halt(cpu)

    assert output == ["72"]
    assert cpu.halted
    assert cpu.fault is None
    assert cpu.state.pc == 11

    ticks = cpu.tick_count
    cpu.tick()
    assert cpu.tick_count == ticks
    assert cpu.state.pc == 11


def test_add_wraps_modulo_256() -> None:
    cpu, _, _ = make_cpu([LDI, 0, 200, LDI, 1, 100, ADD, 0, 1])

    for _ in range(3):
        cpu.tick()

    assert cpu.state.registers[0] == 44
    assert cpu.state.registers[1] == 100


def test_mul_wraps_modulo_256() -> None:
    cpu, _, _ = make_cpu([LDI, 2, 16, MUL, 2, 2])

    cpu.tick()
    cpu.tick()

    assert cpu.state.registers[2] == 0


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        (0b0110, 0b1110, True),
        (0b0110, 0b0100, False),
        (0x55, 0x55, True),
        (0x00, 0x80, True),
        (0x09, 0x08, False),
    ],
)
def test_cmp_is_a_bitwise_subset_test(a: int, b: int, expected: bool) -> None:
    cpu, _, _ = make_cpu([LDI, 0, a, LDI, 1, b, CMP, 0, 1])

    for _ in range(3):
        cpu.tick()

    assert cpu.state.flags.equal is expected
    assert cpu.state.pc == 9


def test_jeq_jumps_only_when_equal() -> None:
    cpu, _, _ = make_cpu([LDI, 2, 0x40, JEQ, 2])
    cpu.tick()
    cpu.state.flags.equal = True

    cpu.tick()

    assert cpu.state.pc == 0x40


@pytest.mark.parametrize("equal", [False, None])
def test_jeq_falls_through_when_not_equal(equal: bool | None) -> None:
    cpu, _, _ = make_cpu([LDI, 2, 0x40, JEQ, 2])
    cpu.tick()
    cpu.state.flags.equal = equal

    cpu.tick()

    assert cpu.state.pc == 5


def test_jne_jumps_only_when_explicitly_not_equal() -> None:
    cpu, _, _ = make_cpu([LDI, 2, 0x40, JNE, 2])
    cpu.tick()
    cpu.state.flags.equal = False

    cpu.tick()

    assert cpu.state.pc == 0x40


@pytest.mark.parametrize("equal", [True, None])
def test_jne_falls_through_when_equal_or_unset(equal: bool | None) -> None:
    cpu, _, _ = make_cpu([LDI, 2, 0x40, JNE, 2])
    cpu.tick()
    cpu.state.flags.equal = equal

    cpu.tick()

    assert cpu.state.pc == 5


def test_jmp_sets_pc_from_register() -> None:
    cpu, _, _ = make_cpu([LDI, 4, 0x30, JMP, 4])

    cpu.tick()
    cpu.tick()

    assert cpu.state.pc == 0x30


def test_push_then_pop_preserves_value_and_stack_pointer() -> None:
    cpu, memory, _ = make_cpu([LDI, 0, 0x99, PUSH, 0, LDI, 0, 0x00, POP, 0])

    cpu.tick()
    cpu.tick()
    assert cpu.state.registers[SP] == STACK_START - 1
    assert memory.read(STACK_START - 1) == 0x99

    cpu.tick()
    cpu.tick()

    assert cpu.state.registers[0] == 0x99
    assert cpu.state.registers[SP] == STACK_START
    assert cpu.state.pc == 10


def test_call_then_ret_returns_to_call_site_plus_two() -> None:
    program = [0] * 0x21
    program[0:3] = [LDI, 1, 0x20]
    program[3:5] = [CALL, 1]
    program[0x20] = RET
    cpu, memory, _ = make_cpu(program)

    cpu.tick()
    cpu.tick()
    assert cpu.state.pc == 0x20
    assert memory.read(cpu.state.registers[SP]) == 5

    cpu.tick()

    assert cpu.state.pc == 5
    assert cpu.state.registers[SP] == STACK_START


def test_st_writes_register_value_to_memory() -> None:
    cpu, memory, _ = make_cpu([LDI, 0, 0x80, LDI, 1, 0x5A, ST, 0, 1])

    for _ in range(3):
        cpu.tick()

    assert memory.read(0x80) == 0x5A
    assert cpu.state.pc == 9


def test_prn_and_pra_emit_in_execution_order() -> None:
    cpu, _, output = make_cpu([LDI, 0, 65, PRA, 0, PRN, 0, HLT])

    run_until_halt(cpu)

    assert output == ["A", "65"]


def test_decode_failure_halts_and_reports(capsys: pytest.CaptureFixture[str]) -> None:
    cpu, _, _ = make_cpu([LDI, 0, 7, 0xFF])

    cpu.tick()
    cpu.tick()

    assert cpu.halted
    assert isinstance(cpu.fault, IllegalOpcodeError)
    assert cpu.fault.address == 3
    assert cpu.fault.opcode == 0xFF
    assert cpu.state.pc == 3
    assert cpu.state.registers == [7, 0, 0, 0, 0, 0, 0, STACK_START]
    assert "Invalid instruction at address 0x03: 11111111" in capsys.readouterr().err


def test_decode_failure_uses_error_output() -> None:
    memory = Memory()
    errors: list[str] = []
    cpu = LS8(memory, error_output=errors.append)
    cpu.poke(0x00, 0b11111110)

    cpu.tick()

    assert errors == ["Invalid instruction at address 0x00: 11111110"]


def test_register_index_out_of_range_is_fatal() -> None:
    cpu, _, _ = make_cpu([LDI, 8, 1])

    cpu.tick()

    assert cpu.halted
    assert isinstance(cpu.fault, OperandError)
    assert cpu.state.pc == 0


def test_push_below_address_zero_is_fatal() -> None:
    cpu, _, _ = make_cpu([PUSH, 0])
    cpu.state.registers[SP] = 0x00

    cpu.tick()

    assert isinstance(cpu.fault, StackError)
    assert cpu.halted


def test_running_off_the_end_of_memory_is_fatal() -> None:
    cpu, _, _ = make_cpu([NOP] * 4, length=4)

    for _ in range(5):
        cpu.tick()

    assert isinstance(cpu.fault, MemoryError)
    assert cpu.state.pc == 4


def test_interrupt_registers_are_general_purpose() -> None:
    cpu, _, _ = make_cpu([LDI, IM, 0x03, LDI, IS, 0x00])

    cpu.tick()
    cpu.tick()

    assert cpu.state.registers[IM] == 0x03
    assert cpu.state.registers[IS] == 0x00
