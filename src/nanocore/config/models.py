from dataclasses import dataclass, field
from typing import Optional

from nanocore.transport.bus import MEMORY_SIZE
from nanocore.loader.loader import PROGRAM_ORIGIN, RESET_VECTOR

@dataclass
class MemoryConfig:
    size: int = MEMORY_SIZE

@dataclass
class ProgramConfig:
    origin: int = PROGRAM_ORIGIN
    reset_vector: int = RESET_VECTOR

@dataclass
class ExecutionConfig:
    max_steps: Optional[int] = None  # None: 停止命令まで無制限に実行

@dataclass
class SystemConfig:
    architecture: str = "MOS6502"
    memory: MemoryConfig = field(default_factory=MemoryConfig)
    program: ProgramConfig = field(default_factory=ProgramConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
