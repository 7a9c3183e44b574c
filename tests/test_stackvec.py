import pytest

from pixmodem.stackvec import CapacityError, StackVec


def test_assignment_text_example():
    vec = StackVec(bytearray(1024))
    for i in range(10):
        vec.push(i * i)
    for i, v in enumerate(vec):
        assert v == i * i
    assert vec.pop() == 9 * 9


def test_len_and_capacity_ok():
    vec = StackVec(bytearray(1024))
    assert len(vec) == 0
    assert vec.capacity() == 1024
    assert not vec
    assert not vec.is_full()


def test_index_oob():
    vec = StackVec(bytearray(1024))
    with pytest.raises(IndexError):
        vec[0]
    assert vec.as_list() == []


def test_index_oob_after_truncate():
    vec = StackVec(bytearray(1024))
    vec.push(10)
    vec.truncate(0)
    with pytest.raises(IndexError):
        vec[0]
    assert len(vec) == 0
    assert vec.as_list() == []


def test_indexing():
    vec = StackVec(bytearray(1024))
    assert len(vec) == 0

    vec.push(10)
    assert vec[0] == 10
    assert len(vec) == 1
    assert vec.capacity() == 1024
    assert len(vec) == 1

    vec.push(2)
    assert vec[0] == 10
    assert vec[1] == 2
    assert len(vec) == 2
    assert vec.capacity() == 1024

    vec.truncate(0)
    assert len(vec) == 0
    assert vec.capacity() == 1024

    for i in range(100):
        vec.push(i)
    assert len(vec) == 100
    for i, value in enumerate(vec):
        assert value == i
    assert vec[99] == 99


def test_mut_indexing():
    vec = StackVec(bytearray(1024), 3)
    assert vec.as_list() == [0, 0, 0]

    vec[0] = 100
    vec[1] = 88
    vec[2] = 99
    assert vec.as_list() == [100, 88, 99]

    vec[0] = 23
    assert vec[0] == 23

    vec[0] = vec[1]
    assert vec[0] == 88


def test_with_len_exceeding_storage():
    with pytest.raises(ValueError):
        StackVec(bytearray(2), 3)


def test_pop():
    vec = StackVec([0] * 1024)
    assert vec.pop() is None

    vec.push(123)
    assert len(vec) == 1
    assert vec.pop() == 123

    for i in range(1024):
        assert len(vec) == i
        vec.push(i)
        assert len(vec) == i + 1

    for i in reversed(range(1024)):
        assert len(vec) == i + 1
        assert vec.pop() == i
        assert len(vec) == i
    assert vec.pop() is None


def test_push_just_far_enough():
    vec = StackVec([0, 0])
    vec.push(1)
    vec.push(2)
    assert vec.is_full()


def test_push_too_far():
    vec = StackVec([0, 0])
    vec.push(1)
    vec.push(2)
    with pytest.raises(CapacityError):
        vec.push(3)
    assert vec.as_list() == [1, 2]


def test_iterator():
    vec = StackVec([0] * 1024)
    assert next(iter(vec), None) is None

    vec.push(123)
    assert len(vec) == 1

    for _ in range(10):
        it = iter(vec)
        assert next(it) == 123
        assert next(it, None) is None

    vec.truncate(0)
    assert next(iter(vec), None) is None

    for i in range(1024):
        vec.push(i * i)

    for i, val in enumerate(vec):
        assert val == i * i

    assert list(vec) == [i * i for i in range(1024)]


def test_as_slice():
    vec = StackVec([0] * 5)
    assert vec.as_list() == []

    vec.push(102)
    assert vec.as_list() == [102]

    vec.push(1)
    assert vec.as_list() == [102, 1]
    assert vec[:] == [102, 1]

    assert vec.pop() == 1
    assert vec.as_list() == [102]


def test_errors():
    vec = StackVec([0] * 1024)
    for i in range(1024):
        vec.push(i)
    for i in range(1024):
        with pytest.raises(CapacityError):
            vec.push(i)
    for i in reversed(range(1024)):
        assert vec.pop() == i
    for _ in range(1024):
        assert vec.pop() is None


def test_truncate_longer_is_noop():
    vec = StackVec([0] * 4)
    vec.push(7)
    vec.truncate(3)
    assert vec.as_list() == [7]


def test_negative_index_reads_from_end():
    vec = StackVec([0] * 4)
    vec.push(5)
    vec.push(6)
    assert vec[-1] == 6
    with pytest.raises(IndexError):
        vec[-3]