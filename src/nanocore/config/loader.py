import yaml
from typing import Dict, Any, Optional

from nanocore.common.errors import ConfigError
from .models import SystemConfig, MemoryConfig, ProgramConfig, ExecutionConfig

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data)

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text))

    def _parse_config(self, data: Optional[Dict[str, Any]]) -> SystemConfig:
        # 空ファイルは全てデフォルト値
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping, got {type(data).__name__}.")

        memory_data = self._section(data, "memory")
        program_data = self._section(data, "program")
        execution_data = self._section(data, "execution")

        memory = MemoryConfig(
            size=self._parse_int(memory_data.get("size", MemoryConfig.size))
        )
        program = ProgramConfig(
            origin=self._parse_int(program_data.get("origin", ProgramConfig.origin)),
            reset_vector=self._parse_int(program_data.get("reset_vector", ProgramConfig.reset_vector))
        )
        max_steps = execution_data.get("max_steps")
        execution = ExecutionConfig(
            max_steps=None if max_steps is None else self._parse_int(max_steps)
        )

        return SystemConfig(
            architecture=str(data.get("architecture", "MOS6502")),
            memory=memory,
            program=program,
            execution=execution
        )

    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"Section '{name}' must be a mapping.")
        return section

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format: {value}")
