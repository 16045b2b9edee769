# src/nanocore/arch/mos6502/instructions/load.py
"""
MOS 6502 転送系命令 (Load/Transfer)。
"""
from nanocore.transport.bus import Bus
from nanocore.arch.mos6502.state import Mos6502CpuState
from nanocore.arch.mos6502.instructions.base import AddressingResult

# @intent:responsibility フラグ更新ヘルパー (N, Z)。結果を生む全ての命令の最後に呼ばれる。
def update_nz(state: Mos6502CpuState, value: int) -> Mos6502CpuState:
    return state.update_flags(n=(value & 0x80) != 0, z=(value == 0))

# --- LDA (Load Accumulator) ---
# @intent:responsibility オペランドをAレジスタへロードし、N, Zフラグを更新。
def lda(state: Mos6502CpuState, bus: Bus, addr_res: AddressingResult) -> Mos6502CpuState:
    _, val, _ = addr_res
    new_state = state.replace(a=val)
    return update_nz(new_state, val)

# --- TAX (Transfer Accumulator to X) ---
def tax(state: Mos6502CpuState, bus: Bus, addr_res: AddressingResult) -> Mos6502CpuState:
    val = state.a
    new_state = state.replace(x=val)
    return update_nz(new_state, val)
