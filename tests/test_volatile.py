import pytest

from pixmodem.volatile import Memory, ReadVolatile, Reserved, Volatile, WriteVolatile

BASE = 0x3F000000


@pytest.fixture
def memory():
    return Memory(BASE, 64)


@pytest.mark.parametrize("width, value", [(1, 0xAB), (2, 270), (4, 0xDEADBEEF), (8, 2**63 + 5)])
def test_store_load_round_trip(memory, width, value):
    memory.store(BASE + 8, width, value)
    assert memory.load(BASE + 8, width) == value


def test_memory_is_little_endian(memory):
    memory.store(BASE, 4, 0x11223344)
    assert memory.load(BASE, 1) == 0x44
    assert memory.load(BASE + 3, 1) == 0x11


def test_memory_starts_zeroed(memory):
    assert memory.load(BASE + 56, 8) == 0


def test_out_of_range_access(memory):
    with pytest.raises(IndexError):
        memory.load(BASE - 1, 1)
    with pytest.raises(IndexError):
        memory.store(BASE + 62, 4, 0)


def test_bad_width(memory):
    with pytest.raises(ValueError):
        memory.load(BASE, 3)


def test_value_too_large(memory):
    with pytest.raises(ValueError):
        memory.store(BASE, 1, 256)
    with pytest.raises(ValueError):
        memory.store(BASE, 1, -1)


def test_register_outside_memory(memory):
    with pytest.raises(IndexError):
        Volatile(memory, BASE + 64, 4)


def test_volatile_read_write(memory):
    reg = Volatile(memory, BASE + 4, 4)
    reg.write(0x12345678)
    assert reg.read() == 0x12345678
    assert memory.load(BASE + 4, 4) == 0x12345678


def test_or_mask(memory):
    reg = Volatile(memory, BASE, 1)
    reg.write(0)
    reg.or_mask(1)
    assert reg.read() == 1
    assert reg.has_mask(1)


def test_and_mask(memory):
    reg = Volatile(memory, BASE, 1)
    reg.write(0xFF)
    reg.and_mask(0x0F)
    assert reg.read() == 0x0F


def test_has_mask(memory):
    reg = Volatile(memory, BASE, 1)
    reg.write(0b0110)
    assert reg.has_mask(0b0100)
    assert not reg.has_mask(0b1100)


def test_write_only_and_read_only_share_memory(memory):
    writer = WriteVolatile(memory, BASE + 16, 4)
    reader = ReadVolatile(memory, BASE + 16, 4)
    writer.write(270)
    assert reader.read() == 270


def test_access_restrictions(memory):
    with pytest.raises(AttributeError):
        WriteVolatile(memory, BASE, 4).read()
    with pytest.raises(AttributeError):
        ReadVolatile(memory, BASE, 4).write(1)
    with pytest.raises(AttributeError):
        Reserved(memory, BASE, 4).read()


def test_repr(memory):
    assert repr(Volatile(memory, BASE, 4)) == "Volatile(address=0x3f000000, size=4)"
    assert repr(Reserved(memory, BASE + 4, 1)).startswith("Reserved(")