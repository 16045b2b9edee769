# src/nanocore/arch/mos6502/instructions/base.py
"""
MOS 6502 アドレッシングモード解決ロジック。
"""
from typing import List, Optional, Tuple

from nanocore.arch.mos6502.state import Mos6502CpuState

# @intent:responsibility アドレッシングモードの解決結果（アドレス、値、オペランド文字列）を返す型。
# address: 解決された実効アドレス (Immediate/Impliedの場合はNone)
# value: Immediateの場合の値、それ以外はNone
# operand_str: トレース表示用のオペランド文字列表現
AddressingResult = Tuple[Optional[int], Optional[int], str]

# --- Addressing Modes ---
# 各関数はデコード時にフェッチ済みのオペランドバイト列を受け取る。

# @intent:responsibility Implied Mode
def addr_implied(operand_bytes: List[int], state: Mos6502CpuState) -> AddressingResult:
    return None, None, ""

# @intent:responsibility Immediate Mode (#$xx)
def addr_immediate(operand_bytes: List[int], state: Mos6502CpuState) -> AddressingResult:
    val = operand_bytes[0]
    return None, val, f"#${val:02X}"
