# src/nanocore/arch/mos6502/instructions/maps.py
"""
MOS 6502 命令マップとデコード/実行ロジック。
"""
from typing import Callable, Dict, List, Tuple

from nanocore.common.errors import UnimplementedOpcodeError
from nanocore.transport.bus import Bus
from nanocore.core.snapshot import Operation
from nanocore.arch.mos6502.state import Mos6502CpuState
from nanocore.arch.mos6502.instructions import base, load, alu, control

# Addressing Mode Function Type
AddrFunc = Callable[[List[int], Mos6502CpuState], base.AddressingResult]
# Execution Function Type
ExecFunc = Callable[[Mos6502CpuState, Bus, base.AddressingResult], Mos6502CpuState]

# Opcode Entry: (Mnemonic, Addressing Mode, Execution Function, Operand Bytes)
OpcodeEntry = Tuple[str, AddrFunc, ExecFunc, int]

OPCODE_MAP: Dict[int, OpcodeEntry] = {
    0xA9: ("LDA", base.addr_immediate, load.lda, 1),
    0xAA: ("TAX", base.addr_implied, load.tax, 0),
    0xE8: ("INX", base.addr_implied, alu.inx, 0),
    0x00: ("BRK", base.addr_implied, control.brk, 0),
}

# @intent:responsibility オペコードとオペランドを解析してOperationを返す。
# @intent:pre-condition pc はオペコードの直後（最初のオペランドバイト）を指していること。
def decode_opcode(opcode: int, bus: Bus, pc: int, state: Mos6502CpuState) -> Operation:
    entry = OPCODE_MAP.get(opcode)
    if not entry:
        raise UnimplementedOpcodeError(opcode, pc - 1)

    mnemonic, addr_func, _, operand_length = entry

    op_bytes = [bus.read(pc + i) for i in range(operand_length)]
    _, _, op_str = addr_func(op_bytes, state)

    return Operation(
        opcode=opcode,
        mnemonic=mnemonic,
        operands=[op_str] if op_str else [],
        operand_bytes=op_bytes,
        length=1 + operand_length
    )

def execute_instruction(operation: Operation, state: Mos6502CpuState, bus: Bus) -> Mos6502CpuState:
    entry = OPCODE_MAP.get(operation.opcode)
    if not entry:
        raise UnimplementedOpcodeError(operation.opcode, state.pc - operation.length)

    _, addr_func, exec_func, _ = entry
    addr_res = addr_func(operation.operand_bytes, state)
    return exec_func(state, bus, addr_res)
