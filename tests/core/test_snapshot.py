# tests/core/test_snapshot.py
"""
nanocore.core.snapshotモジュールの単体テスト。
"""
import pytest

from nanocore.core.state import CpuState
from nanocore.core.snapshot import Operation, Snapshot
from nanocore.transport.bus import BusAccess, BusAccessType

# @intent:test_suite 実行記録の不変データ構造の検証。

class TestBusAccess:
    def test_bus_access_immutability(self):
        access = BusAccess(address=0x1000, data=0xAA, access_type=BusAccessType.READ)
        with pytest.raises(AttributeError):
            access.address = 0x2000

class TestOperation:
    def test_operation_with_operands(self):
        op = Operation(opcode=0xA9, mnemonic="LDA", operands=["#$05"], operand_bytes=[0x05], length=2)
        assert op.opcode_hex == "A9"
        assert str(op) == "LDA #$05"

    def test_operation_defaults(self):
        op = Operation(opcode=0xAA, mnemonic="TAX")
        assert op.operands == []
        assert op.operand_bytes == []
        assert op.length == 1
        assert str(op) == "TAX"

    def test_operation_immutability(self):
        op = Operation(opcode=0xE8, mnemonic="INX")
        with pytest.raises(AttributeError):
            op.mnemonic = "DEX"

class TestSnapshot:
    @pytest.fixture
    def snapshot(self):
        return Snapshot(
            state=CpuState(pc=0x8001),
            operation=Operation(opcode=0x00, mnemonic="BRK"),
            address=0x8000,
            step_count=1,
            bus_activity=[BusAccess(address=0x8000, data=0x00, access_type=BusAccessType.READ)],
        )

    def test_snapshot_immutability(self, snapshot):
        with pytest.raises(AttributeError):
            snapshot.state = CpuState(pc=0x200)
        with pytest.raises(AttributeError):
            snapshot.bus_activity = []

    def test_snapshot_default_factory_bus_activity(self):
        state = CpuState()
        operation = Operation(opcode=0x00, mnemonic="BRK")
        snapshot1 = Snapshot(state=state, operation=operation, address=0, step_count=1)
        snapshot2 = Snapshot(state=state, operation=operation, address=0, step_count=1)
        assert snapshot1.bus_activity is not snapshot2.bus_activity
        assert snapshot1.bus_activity == []
