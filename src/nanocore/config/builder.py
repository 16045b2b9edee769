import logging

from nanocore.common.errors import ConfigError
from nanocore.transport.bus import Bus, RAM, ADDRESS_SPACE_SIZE
from nanocore.loader.loader import ProgramLoader
from nanocore.arch.mos6502.cpu import Mos6502Cpu
from .models import SystemConfig

logger = logging.getLogger(__name__)

SUPPORTED_ARCHITECTURES = ("MOS6502",)

# @intent:responsibility システム構成（Config）に基づいて、RAM、Bus、Loader、CPUを生成・接続します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Mos6502Cpu:
        self.validate(config)

        bus = Bus(RAM(config.memory.size))
        loader = ProgramLoader(origin=config.program.origin, reset_vector=config.program.reset_vector)
        cpu = Mos6502Cpu(bus, loader=loader, max_steps=config.execution.max_steps)

        logger.debug(
            f"Built {config.architecture} system: memory {config.memory.size:#x} bytes, "
            f"origin {config.program.origin:#06x}, reset vector {config.program.reset_vector:#06x}"
        )
        return cpu

    # @intent:responsibility 構成値の整合性を検証します。ロード時ではなく構築時に失敗させるためです。
    def validate(self, config: SystemConfig) -> None:
        if config.architecture.upper() not in SUPPORTED_ARCHITECTURES:
            raise ConfigError(f"Unsupported architecture: {config.architecture}")

        size = config.memory.size
        if not 0 < size <= ADDRESS_SPACE_SIZE:
            raise ConfigError(f"Memory size {size:#x} must be between 1 and {ADDRESS_SPACE_SIZE:#x}.")
        if not 0 <= config.program.origin < size:
            raise ConfigError(f"Program origin {config.program.origin:#06x} is outside memory.")
        # ベクトルは2バイト
        if not 0 <= config.program.reset_vector < size - 1:
            raise ConfigError(f"Reset vector {config.program.reset_vector:#06x} is outside memory.")

        max_steps = config.execution.max_steps
        if max_steps is not None and max_steps <= 0:
            raise ConfigError(f"max_steps must be positive, got {max_steps}.")
