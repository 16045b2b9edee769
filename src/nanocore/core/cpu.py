# nanocore/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from enum import Enum
from typing import Dict, List, Optional

from nanocore.common.errors import EmulatorError, ExecutionError, MemoryAccessError, StepLimitExceededError
from nanocore.common.types import RegisterLayoutInfo
from nanocore.core.snapshot import Operation, Snapshot
from nanocore.core.state import CpuState
from nanocore.transport.bus import Bus, ADDRESS_SPACE_SIZE

logger = logging.getLogger(__name__)

# @intent:responsibility 命令サイクルの外側から観測できる実行状態を定義します。
class RunState(Enum):
    READY = "READY"       # リセット直後、まだ実行していない
    RUNNING = "RUNNING"   # 少なくとも1命令を実行し、停止していない
    HALTED = "HALTED"     # 停止命令を実行した（終端）
    FAULTED = "FAULTED"   # 実行エラーが発生した（終端）

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus, max_steps: Optional[int] = None):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._step_count: int = 0
        self._run_state = RunState.READY
        self._max_steps = max_steps
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._step_count = 0
        self._run_state = RunState.READY

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        return self._state

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def step_count(self) -> int:
        return self._step_count

    # @intent:responsibility 現在のPCからオペコードをフェッチし、PCを1進めます。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility フェッチしたオペコードを解析し、Operationオブジェクトに変換します。
    # @intent:post-condition 未知のオペコードの場合は UnimplementedOpcodeError を送出します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility PCを指定バイト数だけ進めます。
    # @intent:post-condition 16bitアドレス空間を超える場合はラップせずに MemoryAccessError を送出します。
    def _advance_pc(self, count: int) -> None:
        new_pc = self._state.pc + count
        if new_pc >= ADDRESS_SPACE_SIZE:
            raise MemoryAccessError(
                new_pc, ADDRESS_SPACE_SIZE,
                f"Instruction pointer advanced past the end of the address space ({new_pc:#x})."
            )
        self._state.pc = new_pc

    # @intent:responsibility 命令実行前にPCをオペランド分進めます。オペコード分はフェッチ時に進めてあります。
    def _update_pc(self, operation: Operation) -> None:
        self._advance_pc(operation.length - 1)

    def _check_runnable(self) -> None:
        if self._run_state in (RunState.HALTED, RunState.FAULTED):
            raise ExecutionError(f"CPU is {self._run_state.value.lower()}; call reset() before running again.")

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（ログクリア→フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUとバスの状態を含むSnapshotオブジェクトを返します。
        停止済み・フォルト済みのCPUに対しては ExecutionError を送出します。
        """
        self._check_runnable()

        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        try:
            # 2. フェッチ (PC += 1)
            opcode = self._fetch()
            # 3. デコード
            operation = self._decode(opcode)
            # 4. PC更新 (オペランド分)
            self._update_pc(operation)
            # 5. 実行
            self._execute(operation)
        except EmulatorError as e:
            self._run_state = RunState.FAULTED
            logger.error(f"CPU fault at {initial_pc:#06x}: {e}")
            raise

        self._step_count += 1
        if self._state.halted:
            self._run_state = RunState.HALTED
            logger.info(f"Halted at {initial_pc:#06x} after {self._step_count} steps")
        else:
            self._run_state = RunState.RUNNING

        # 6. 後処理 & Snapshot生成
        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility 停止命令またはフォルトまで命令サイクルを繰り返します。
    def execute(self, max_steps: Optional[int] = None) -> int:
        """
        停止命令に到達するまで実行し、実行した命令数を返します。

        max_steps (省略時は構築時の設定値) を指定した場合、その命令数を実行しても
        停止しなければ StepLimitExceededError を送出します。
        """
        if max_steps is None:
            max_steps = self._max_steps
        self._check_runnable()

        steps = 0
        while not self._state.halted:
            if max_steps is not None and steps >= max_steps:
                raise StepLimitExceededError(max_steps, self._state.pc)
            self.step()
            steps += 1
        return steps

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        logger.debug(f"{initial_pc:04X}: {operation.opcode_hex} {operation}")
        return Snapshot(
            state=replace(self._state), # 以降の実行で変化しないようコピーを保持
            operation=operation,
            address=initial_pc,
            step_count=self._step_count,
            bus_activity=bus_activity
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをどのようにグループ化して表示すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        """
        現在のフラグ（ステータスレジスタ）の各ビットの状態を辞書形式で返す。
        """
        pass
