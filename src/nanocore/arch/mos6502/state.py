# src/nanocore/arch/mos6502/state.py
"""
MOS 6502 CPUの状態定義。
"""
from dataclasses import dataclass, replace
from enum import IntFlag

from nanocore.core.state import CpuState

# @intent:responsibility ステータスレジスタ(P)のうち意味が定義されたビットを列挙します。
# @intent:rationale 他のビット（C, I, D, B, V）は予約扱いとし、どの命令も読み書きしません。
class StatusFlag(IntFlag):
    ZERO = 0x02      # bit 1
    NEGATIVE = 0x80  # bit 7

# update_flags() のキーワード名とビットマスクの対応 (plain int; IntFlagの~は定義済みビット内で反転するため)
_FLAG_NAMES = {
    "z": int(StatusFlag.ZERO),
    "n": int(StatusFlag.NEGATIVE),
}

# @intent:responsibility MOS 6502 CPUの状態（レジスタ、フラグ）を保持する。
@dataclass
class Mos6502CpuState(CpuState):
    """
    MOS 6502 CPUのレジスタ状態。電源投入時は全て0。
    """
    a: int = 0  # Accumulator
    x: int = 0  # Index X
    y: int = 0  # Index Y (no handler uses it yet)
    p: int = 0  # Processor status

    # @intent:responsibility フラグの状態を取得するヘルパープロパティ。
    @property
    def flag_z(self) -> bool: return bool(self.p & StatusFlag.ZERO)
    @property
    def flag_n(self) -> bool: return bool(self.p & StatusFlag.NEGATIVE)

    # @intent:responsibility 指定されたフラグだけを変更した新しいインスタンスを返す。
    # @intent:pre-condition フラグ名は z / n のみ。未定義ビットに意味を与えないため、それ以外は ValueError。
    def update_flags(self, **kwargs: bool) -> 'Mos6502CpuState':
        new_p = self.p
        for flag_name, value in kwargs.items():
            mask = _FLAG_NAMES.get(flag_name.lower())
            if mask is None:
                raise ValueError(f"Unknown status flag: {flag_name}")
            if value:
                new_p |= mask
            else:
                new_p &= ~mask & 0xFF
        return self.replace(p=new_p)

    # @intent:responsibility dataclasses.replaceのラッパー。
    def replace(self, **changes) -> 'Mos6502CpuState':
        return replace(self, **changes)
