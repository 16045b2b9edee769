# src/nanocore/arch/mos6502/instructions/control.py
"""
MOS 6502 制御系命令。
"""
from nanocore.transport.bus import Bus
from nanocore.arch.mos6502.state import Mos6502CpuState
from nanocore.arch.mos6502.instructions.base import AddressingResult

# @intent:responsibility BRK。このコアでは割り込みを扱わないため、実行ループを停止させる命令として扱う。
# @intent:note フラグ、スタック、PCはいずれも変更しない。後続のバイトは一切フェッチされない。
def brk(state: Mos6502CpuState, bus: Bus, addr_res: AddressingResult) -> Mos6502CpuState:
    return state.replace(halted=True)
