# src/nanocore/arch/mos6502/instructions/alu.py
"""
MOS 6502 演算系命令 (Increment)。
"""
from nanocore.transport.bus import Bus
from nanocore.arch.mos6502.state import Mos6502CpuState
from nanocore.arch.mos6502.instructions.base import AddressingResult
from nanocore.arch.mos6502.instructions.load import update_nz

# --- INX (Increment X) ---
# @intent:note 0xFF + 1 は 0x00 に黙ってラップする。Carry は変化しない。
def inx(state: Mos6502CpuState, bus: Bus, addr_res: AddressingResult) -> Mos6502CpuState:
    val = (state.x + 1) & 0xFF
    new_state = state.replace(x=val)
    return update_nz(new_state, val)
