# nanocore/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CPUの基本的な状態（レジスタ群）を保持するデータ構造を定義します。
"""
from dataclasses import dataclass

# @intent:responsibility CPUのレジスタ状態を保持します。アーキテクチャ固有のレジスタはこれを拡張します。
@dataclass
class CpuState:
    """
    全アーキテクチャに共通する状態。
    """
    pc: int = 0x0000  # Program Counter (instruction pointer)
    halted: bool = False  # CPU stop state flag
