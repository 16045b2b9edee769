# nanocore/transport/bus.py
"""
Transport Layer (メモリとバス)

このモジュールは、フラットな16bitアドレス空間を抽象化し、
バイト単位および16bit（リトルエンディアン）の読み書きを提供します。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List

from nanocore.common.errors import MemoryAccessError

# 2^16 - 1 バイト。有効アドレスは 0x0000-0xFFFE。
MEMORY_SIZE = 0xFFFF
ADDRESS_SPACE_SIZE = 0x10000

# @intent:responsibility バスアクセスを記録するためのタイプを定義します。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のバスアクセス操作を記録します。
@dataclass(frozen=True)
class BusAccess:
    """
    バス上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: BusAccessType

# @intent:responsibility バイト単位の読み書きを要求し、16bitアクセスをその上に提供するメモリインターフェース。
# @intent:rationale read/write の2つのプリミティブを実装するだけで、任意のストアが read16/write16 を得られます。
class Memory(ABC):
    """
    メモリの抽象基底クラス。
    """
    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    @abstractmethod
    def read(self, address: int) -> int:
        pass

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    @abstractmethod
    def write(self, address: int, data: int) -> None:
        pass

    # @intent:responsibility 16bit値をリトルエンディアンで読み出します。
    # @intent:pre-condition address と address + 1 の両方が有効範囲内である必要があります。ラップアラウンドはしません。
    def read16(self, address: int) -> int:
        lo = self.read(address)
        hi = self.read(address + 1)
        return (hi << 8) | lo

    # @intent:responsibility 16bit値をリトルエンディアンで書き込みます（下位バイトが address）。
    def write16(self, address: int, value: int) -> None:
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"Data {value} is not a 16-bit value.")
        # 上位バイトの範囲を先に検査し、失敗時にはどちらのバイトも書き込まない。
        size = self.get_size()
        if not 0 <= address + 1 < size:
            raise MemoryAccessError(address + 1, size)
        self.write(address, value & 0xFF)
        self.write(address + 1, (value >> 8) & 0xFF)

    # @intent:responsibility アドレス可能なバイト数を返します。固定長のストアはこれをオーバーライドします。
    def get_size(self) -> int:
        return ADDRESS_SPACE_SIZE

# @intent:responsibility 固定サイズのRAMを提供します。
class RAM(Memory):
    """
    bytearray をバッキングストアとする固定長メモリ。全て0で初期化されます。
    """
    # @intent:pre-condition sizeは 1 以上 ADDRESS_SPACE_SIZE 以下の整数である必要があります。
    def __init__(self, size: int = MEMORY_SIZE):
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        if size > ADDRESS_SPACE_SIZE:
            raise ValueError(f"RAM size {size:#x} exceeds the 16-bit address space.")
        self._memory = bytearray(size)
        self._size = size

    def _check_address(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise MemoryAccessError(address, self._size)

    def read(self, address: int) -> int:
        self._check_address(address)
        return self._memory[address]

    def write(self, address: int, data: int) -> None:
        self._check_address(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    def get_size(self) -> int:
        return self._size

# @intent:responsibility CPUとメモリの間に立ち、全てのアクセスを記録します。
# @intent:rationale バスの全てのアクセスを記録し、Snapshotに含めることで実行の観測可能性を高めます。
class Bus(Memory):
    """
    単一のバッキングストアへのアクセスを仲介し、アクセスログを保持する共通バス。
    Memoryを継承するため、read16/write16 も記録付きで利用できます。
    """
    def __init__(self, memory: Memory):
        if not isinstance(memory, Memory):
            raise TypeError("Backing store must be an instance of a class derived from Memory.")
        self._memory = memory
        self._bus_activity_log: List[BusAccess] = []

    def _log_access(self, address: int, data: int, access_type: BusAccessType) -> None:
        self._bus_activity_log.append(BusAccess(address=address, data=data, access_type=access_type))

    # @intent:responsibility 記録されたバスアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        log = self._bus_activity_log
        self._bus_activity_log = []
        return log

    # @intent:responsibility バッキングストアのサイズを返します。
    def get_size(self) -> int:
        return self._memory.get_size()

    def read(self, address: int) -> int:
        data = self._memory.read(address)
        self._log_access(address, data, BusAccessType.READ)
        return data

    def write(self, address: int, data: int) -> None:
        self._memory.write(address, data)
        self._log_access(address, data, BusAccessType.WRITE)

    # @intent:responsibility ログを記録せずに読み出します。インスペクタ用。
    def peek(self, address: int) -> int:
        return self._memory.read(address)

    # @intent:responsibility ログを記録せずに書き込みます。ローダーによる初期化用のバックドアです。
    def load(self, address: int, data: int) -> None:
        self._memory.write(address, data)
