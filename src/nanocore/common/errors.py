"""
エミュレータ全体で使用する例外階層。

全ての例外は EmulatorError を継承するため、呼び出し側は単一の except 節で
エミュレータ由来のエラーを捕捉できます。

    EmulatorError
    ├── MemoryAccessError   (IndexError互換) ストア範囲外のアドレス
    ├── ProgramTooLargeError (ValueError互換) プログラムがメモリに収まらない
    ├── ExecutionError
    │   ├── UnimplementedOpcodeError 未実装オペコード
    │   └── StepLimitExceededError   ステップ上限超過
    └── ConfigError         (ValueError互換) 不正なシステム構成
"""


# @intent:responsibility エミュレータ由来の全例外の基底クラス。
class EmulatorError(Exception):
    pass


# @intent:responsibility メモリストアの範囲外アクセスを表します。
# @intent:rationale 既存の IndexError を捕捉するコードとの互換性のため、IndexError も継承します。
class MemoryAccessError(EmulatorError, IndexError):
    def __init__(self, address: int, size: int, message: str = ""):
        self.address = address
        self.size = size
        super().__init__(message or f"Address {address:#06x} out of bounds for memory of size {size:#06x}.")


# @intent:responsibility ロード対象のプログラムが残りのアドレス空間に収まらないことを表します。
class ProgramTooLargeError(EmulatorError, ValueError):
    def __init__(self, length: int, capacity: int, origin: int):
        self.length = length
        self.capacity = capacity
        self.origin = origin
        super().__init__(
            f"Program of {length} bytes does not fit at {origin:#06x} "
            f"({capacity} bytes available)."
        )


class ExecutionError(EmulatorError):
    """命令実行中に発生したエラー。"""
    pass


# @intent:responsibility デコードできないオペコードによるフォルトを表します。
class UnimplementedOpcodeError(ExecutionError):
    """
    オペコード表に存在しないバイトをフェッチした。

    Attributes:
        opcode: 問題のオペコード値
        address: オペコードをフェッチしたアドレス
        pc: フォルト時点の命令ポインタ（フェッチ済みなので address + 1）
    """
    def __init__(self, opcode: int, address: int):
        self.opcode = opcode
        self.address = address
        self.pc = address + 1
        super().__init__(f"Unimplemented opcode {opcode:#04x} at {address:#06x}.")


# @intent:responsibility 呼び出し側が指定したステップ上限に達したことを表します。
class StepLimitExceededError(ExecutionError):
    def __init__(self, max_steps: int, pc: int):
        self.max_steps = max_steps
        self.pc = pc
        super().__init__(f"Program did not halt within {max_steps} steps (PC: {pc:#06x}).")


class ConfigError(EmulatorError, ValueError):
    """システム構成ファイルの内容が不正。"""
    pass
