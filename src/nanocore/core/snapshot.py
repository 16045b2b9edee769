# nanocore/core/snapshot.py
"""
実行状態の不変スナップショット

1命令の実行結果（レジスタ、命令、バスアクティビティ）を記録する不変のデータ構造を定義します。
"""
from dataclasses import dataclass, field
from typing import List

from nanocore.core.state import CpuState
from nanocore.transport.bus import BusAccess


# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    デコードされた命令（オペコード、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode: int
    mnemonic: str # 例: "LDA"
    operands: List[str] = field(default_factory=list) # 例: ["#$05"]
    operand_bytes: List[int] = field(default_factory=list) # 生のオペランドバイト
    length: int = 1 # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:02X}"

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic


# @intent:responsibility ある一時点におけるCPUの状態と、そのステップのバスアクセスを不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1ステップ実行直後の状態記録。

    state は実行後のレジスタ状態のコピーであり、以降の実行で変化しません。
    """
    state: CpuState
    operation: Operation
    address: int # 命令をフェッチしたアドレス
    step_count: int # 累計実行命令数
    bus_activity: List[BusAccess] = field(default_factory=list)
