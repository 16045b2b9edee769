import pytest
import yaml

from nanocore.common.errors import ConfigError, StepLimitExceededError
from nanocore.config.loader import ConfigLoader
from nanocore.config.builder import SystemBuilder
from nanocore.config.models import SystemConfig, MemoryConfig, ProgramConfig, ExecutionConfig
from nanocore.arch.mos6502.cpu import Mos6502Cpu


FULL_CONFIG = """
architecture: "MOS6502"
memory:
  size: 0x10000
program:
  origin: "0x0600"
  reset_vector: 0xFFFC
execution:
  max_steps: 100
"""


class TestConfigLoader:
    def test_parse_full_config(self):
        config = ConfigLoader().load_from_string(FULL_CONFIG)
        assert config.architecture == "MOS6502"
        assert config.memory.size == 0x10000
        assert config.program.origin == 0x0600
        assert config.program.reset_vector == 0xFFFC
        assert config.execution.max_steps == 100

    def test_defaults_match_fixed_layout(self):
        config = ConfigLoader().load_from_string("")
        assert config == SystemConfig()
        assert config.memory.size == 0xFFFF
        assert config.program.origin == 0x8000
        assert config.program.reset_vector == 0xFFFC
        assert config.execution.max_steps is None

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "machine.yaml"
        path.write_text(FULL_CONFIG)
        config = ConfigLoader().load_from_file(str(path))
        assert config.program.origin == 0x0600

    def test_decimal_strings(self):
        data = yaml.safe_load("program:\n  origin: '1536'\n")
        config = ConfigLoader()._parse_config(data)
        assert config.program.origin == 1536

    @pytest.mark.parametrize("text", [
        "memory:\n  size: big\n",
        "program:\n  origin: true\n",
        "execution:\n  max_steps: 1.5\n",
        "memory: [1, 2]\n",
        "- just\n- a list\n",
    ])
    def test_invalid_values(self, text):
        with pytest.raises(ConfigError):
            ConfigLoader().load_from_string(text)


class TestSystemBuilder:
    def test_build_default_system(self):
        cpu = SystemBuilder().build_system(SystemConfig())
        assert isinstance(cpu, Mos6502Cpu)
        assert cpu.memory.get_size() == 0xFFFF
        cpu.load_and_run([0xA9, 0x05, 0xAA, 0x00])
        assert cpu.index_x == 5

    def test_build_from_yaml(self):
        config = ConfigLoader().load_from_string(FULL_CONFIG)
        cpu = SystemBuilder().build_system(config)
        cpu.load([0xA9, 0x10, 0x00])
        cpu.reset()
        assert cpu.instruction_pointer == 0x0600
        cpu.execute()
        assert cpu.accumulator == 0x10

    def test_configured_step_limit_applies(self):
        config = ConfigLoader().load_from_string(FULL_CONFIG)
        cpu = SystemBuilder().build_system(config)
        with pytest.raises(StepLimitExceededError):
            cpu.load_and_run([0xE8] * 200 + [0x00])

    @pytest.mark.parametrize("config", [
        SystemConfig(architecture="Z80"),
        SystemConfig(memory=MemoryConfig(size=0)),
        SystemConfig(memory=MemoryConfig(size=0x10001)),
        SystemConfig(memory=MemoryConfig(size=0x1000)),
        SystemConfig(memory=MemoryConfig(size=0x1000), program=ProgramConfig(origin=0x0200, reset_vector=0x0FFF)),
        SystemConfig(program=ProgramConfig(origin=0xFFFF)),
        SystemConfig(execution=ExecutionConfig(max_steps=0)),
    ])
    def test_invalid_configs(self, config):
        with pytest.raises(ConfigError):
            SystemBuilder().build_system(config)

    def test_small_memory_system(self):
        config = SystemConfig(
            memory=MemoryConfig(size=0x1000),
            program=ProgramConfig(origin=0x0200, reset_vector=0x0FFC),
        )
        cpu = SystemBuilder().build_system(config)
        cpu.load_and_run([0xA9, 0x80, 0x00])
        assert cpu.negative_flag
