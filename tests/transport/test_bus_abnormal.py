import unittest
from nanocore.common.errors import MemoryAccessError
from nanocore.transport.bus import Bus, RAM

class TestBusAbnormal(unittest.TestCase):
    def setUp(self):
        self.bus = Bus(RAM(0x1000)) # 4KB RAM

    def test_read_out_of_bounds(self):
        with self.assertRaises(MemoryAccessError):
            self.bus.read(0x2000)

    def test_write_out_of_bounds(self):
        with self.assertRaises(IndexError):
            self.bus.write(0x2000, 0xFF)

    def test_failed_access_is_not_logged(self):
        with self.assertRaises(MemoryAccessError):
            self.bus.read(0x1000)
        self.assertEqual(self.bus.get_and_clear_activity_log(), [])

    def test_read16_straddling_the_end(self):
        with self.assertRaises(MemoryAccessError) as ctx:
            self.bus.read16(0x0FFF)
        self.assertEqual(ctx.exception.address, 0x1000)
        self.assertEqual(ctx.exception.size, 0x1000)

    def test_write16_straddling_the_end_writes_nothing(self):
        with self.assertRaises(MemoryAccessError):
            self.bus.write16(0x0FFF, 0x1234)
        self.assertEqual(self.bus.peek(0x0FFF), 0)
        self.assertEqual(self.bus.get_and_clear_activity_log(), [])

    def test_write_invalid_data(self):
        with self.assertRaises(ValueError):
            self.bus.write(0x0000, 0x1FF)

    def test_ram_invalid_init(self):
        with self.assertRaises(ValueError):
            RAM(-1)
        with self.assertRaises(ValueError):
            RAM(0)

if __name__ == '__main__':
    unittest.main()
