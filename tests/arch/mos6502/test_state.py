import pytest

from nanocore.arch.mos6502.state import Mos6502CpuState, StatusFlag


def test_initial_state_is_zeroed():
    state = Mos6502CpuState()
    assert (state.pc, state.a, state.x, state.y, state.p) == (0, 0, 0, 0, 0)
    assert not state.halted
    assert not state.flag_z
    assert not state.flag_n


def test_flag_bit_positions():
    assert StatusFlag.ZERO == 0b0000_0010
    assert StatusFlag.NEGATIVE == 0b1000_0000


def test_update_flags_returns_new_instance():
    state = Mos6502CpuState()
    new_state = state.update_flags(z=True, n=True)
    assert new_state is not state
    assert new_state.p == 0x82
    assert state.p == 0x00


def test_update_flags_leaves_reserved_bits_untouched():
    state = Mos6502CpuState(p=0b0111_1101)
    assert state.update_flags(z=False, n=True).p == 0b1111_1101
    assert state.update_flags(z=False, n=False).p == 0b0111_1101


def test_update_flags_rejects_undefined_flags():
    with pytest.raises(ValueError, match="Unknown status flag: c"):
        Mos6502CpuState().update_flags(c=True)


def test_replace_keeps_other_registers():
    state = Mos6502CpuState(a=1, x=2, y=3, p=0x80, pc=0x8000)
    new_state = state.replace(a=9)
    assert (new_state.a, new_state.x, new_state.y, new_state.p, new_state.pc) == (9, 2, 3, 0x80, 0x8000)
