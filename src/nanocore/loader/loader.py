# nanocore/loader/loader.py
"""
プログラムローダーモジュール。
生のバイナリ命令列を固定のオリジンへ配置し、リセットベクトルを設定します。
"""
import logging
from pathlib import Path
from typing import Iterable, Union

from nanocore.common.errors import MemoryAccessError, ProgramTooLargeError
from nanocore.transport.bus import Bus

logger = logging.getLogger(__name__)

PROGRAM_ORIGIN = 0x8000
RESET_VECTOR = 0xFFFC

class ProgramLoader:
    """
    命令列をバスにロードするローダー。

    プログラムは origin から順にそのまま書き込まれ、最後に origin の値が
    reset_vector 番地へ16bitリトルエンディアンで書き込まれます。
    """
    def __init__(self, origin: int = PROGRAM_ORIGIN, reset_vector: int = RESET_VECTOR):
        self.origin = origin
        self.reset_vector = reset_vector

    # @intent:responsibility 命令列をオリジンから書き込み、リセットベクトルを設定します。
    # @intent:pre-condition 命令列はオリジンからメモリ末尾までに収まる必要があります。収まらない場合は何も書き込みません。
    def load(self, program: Iterable[int], bus: Bus) -> None:
        data = bytes(program)
        size = bus.get_size()
        if self.origin >= size:
            raise MemoryAccessError(self.origin, size)
        if self.reset_vector + 1 >= size:
            raise MemoryAccessError(self.reset_vector + 1, size)
        capacity = size - self.origin
        if len(data) > capacity:
            raise ProgramTooLargeError(len(data), capacity, self.origin)

        for offset, byte_data in enumerate(data):
            bus.load(self.origin + offset, byte_data)

        # リセットベクトル (little-endian)
        bus.load(self.reset_vector, self.origin & 0xFF)
        bus.load(self.reset_vector + 1, (self.origin >> 8) & 0xFF)

        logger.debug(f"Loaded {len(data)} bytes at {self.origin:#06x}, reset vector {self.reset_vector:#06x}")

    # @intent:responsibility 生のバイナリイメージファイルを読み込み、load() と同様に配置します。
    def load_file(self, file_path: Union[str, Path], bus: Bus) -> int:
        """
        ファイルの内容を全てロードし、ロードしたバイト数を返します。
        """
        data = Path(file_path).read_bytes()
        self.load(data, bus)
        return len(data)
