# src/nanocore/arch/mos6502/cpu.py
"""
MOS 6502 CPUエミュレーションの中心モジュール。

Mos6502Cpu はレジスタ、ステータスフラグ、メモリ（バス）を所有する1台のマシンであり、
ロード、リセット、実行の公開APIを提供します。

    cpu = Mos6502Cpu()
    cpu.load_and_run([0xA9, 0x05, 0xAA, 0x00])
    assert cpu.index_x == 5
"""
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from nanocore.common.types import RegisterLayoutInfo, RegisterInfo
from nanocore.core.cpu import AbstractCpu
from nanocore.core.snapshot import Operation
from nanocore.transport.bus import Bus, RAM, MEMORY_SIZE
from nanocore.loader.loader import ProgramLoader
from nanocore.arch.mos6502.state import Mos6502CpuState
from nanocore.arch.mos6502.instructions.maps import decode_opcode, execute_instruction


def _check_byte(name: str, value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be an 8-bit value, got {value}.")
    return value


# @intent:responsibility MOS 6502 CPUの具体的なエミュレーションロジックを提供する。
class Mos6502Cpu(AbstractCpu):
    """
    MOS 6502 CPUをエミュレートするクラス。
    bus を省略すると、0xFFFF バイトのRAMを持つ専用のバスを生成します。
    """
    def __init__(self, bus: Optional[Bus] = None, loader: Optional[ProgramLoader] = None,
                 max_steps: Optional[int] = None):
        if bus is None:
            bus = Bus(RAM(MEMORY_SIZE))
        self._loader = loader if loader is not None else ProgramLoader()
        super().__init__(bus, max_steps)

    # @intent:responsibility 電源投入時の状態を生成する。全レジスタ 0。
    def _create_initial_state(self) -> Mos6502CpuState:
        return Mos6502CpuState()

    def get_state(self) -> Mos6502CpuState:
        return self._state

    @property
    def memory(self) -> Bus:
        return self._bus

    @property
    def loader(self) -> ProgramLoader:
        return self._loader

    # @intent:responsibility 命令フェッチ。PCはオペコード1バイト分進む。
    def _fetch(self) -> int:
        opcode = self._bus.read(self._state.pc)
        self._advance_pc(1)
        return opcode

    # @intent:responsibility 命令デコード。オペランドは現在のPC（オペコード直後）から読む。
    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._bus, self._state.pc, self._state)

    # @intent:responsibility 命令実行。命令関数は新しいStateを返す。
    def _execute(self, operation: Operation) -> None:
        self._state = execute_instruction(operation, self._state, self._bus)

    # --- Loader / Reset ---

    def load(self, program: Iterable[int]) -> None:
        self._loader.load(program, self._bus)

    def load_file(self, file_path: Union[str, Path]) -> int:
        return self._loader.load_file(file_path, self._bus)

    # @intent:responsibility リセット処理。A, X, P と停止状態をクリアし、PCをリセットベクトルから読み込む。
    # @intent:note Yレジスタとメモリはリセットの影響を受けない。
    def reset(self) -> None:
        # ベクタの読み出しに失敗した場合、状態は変更しない。
        pc = self._bus.read16(self._loader.reset_vector)
        y = self._state.y
        super().reset()
        self._state = self._state.replace(y=y, pc=pc)

    def load_and_run(self, program: Iterable[int], max_steps: Optional[int] = None) -> int:
        self.load(program)
        self.reset()
        return self.execute(max_steps)

    # --- Register access ---

    @property
    def accumulator(self) -> int:
        return self._state.a

    @accumulator.setter
    def accumulator(self, value: int) -> None:
        self._state.a = _check_byte("accumulator", value)

    @property
    def index_x(self) -> int:
        return self._state.x

    @index_x.setter
    def index_x(self, value: int) -> None:
        self._state.x = _check_byte("index_x", value)

    @property
    def index_y(self) -> int:
        return self._state.y

    @index_y.setter
    def index_y(self, value: int) -> None:
        self._state.y = _check_byte("index_y", value)

    @property
    def status(self) -> int:
        return self._state.p

    # @intent:note 生の書き込みは検査・テスト用。命令はフラグを update_flags() 経由でのみ変更する。
    @status.setter
    def status(self, value: int) -> None:
        self._state.p = _check_byte("status", value)

    @property
    def instruction_pointer(self) -> int:
        return self._state.pc

    @instruction_pointer.setter
    def instruction_pointer(self, value: int) -> None:
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"instruction_pointer must be a 16-bit address, got {value}.")
        self._state.pc = value

    @property
    def zero_flag(self) -> bool:
        return self._state.flag_z

    @property
    def negative_flag(self) -> bool:
        return self._state.flag_n

    # --- Inspection ---

    # @intent:responsibility レジスタマップを返す。
    def get_register_map(self) -> Dict[str, int]:
        state = self._state
        return {
            "A": state.a,
            "X": state.x,
            "Y": state.y,
            "PC": state.pc,
            "P": state.p
        }

    # @intent:responsibility 定義済みフラグの状態を返す。
    def get_flag_state(self) -> Dict[str, bool]:
        return {
            "N": self._state.flag_n,
            "Z": self._state.flag_z
        }

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("Registers", [
                RegisterInfo("A", 8),
                RegisterInfo("X", 8),
                RegisterInfo("Y", 8),
                RegisterInfo("P", 8)
            ]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("PC", 16)
            ])
        ]
