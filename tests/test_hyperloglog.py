import random

import pytest

from kiwistore.hyperloglog import (
    HLL_DENSE_SIZE,
    HLL_REGISTER_MAX,
    HLL_REGISTERS,
    HyperLogLog,
    merged_count,
    murmurhash64a,
)


def _elements(prefix, n):
    return [f"{prefix}-{i}".encode() for i in range(n)]


def _nonzero(sketch):
    return [i for i in range(HLL_REGISTERS) if sketch.register(i)]


def test_hash_is_deterministic_and_64_bit():
    for data in (b"", b"a", b"abcdefgh", b"abcdefghi", b"x" * 100):
        h = murmurhash64a(data)
        assert h == murmurhash64a(data)
        assert 0 <= h < 1 << 64


def test_hash_distinguishes_inputs():
    inputs = [b"", b"a", b"b", b"abcdefgh", b"abcdefghi", b"abcdefgh\x00"]
    hashes = {murmurhash64a(d) for d in inputs}
    assert len(hashes) == len(inputs)


def test_empty_sketch_counts_zero():
    assert HyperLogLog().count() == 0


def test_single_element_counts_one():
    sketch = HyperLogLog()
    assert sketch.add(b"hello") is True
    assert sketch.count() == 1


def test_readding_does_not_update():
    sketch = HyperLogLog()
    assert sketch.add(b"hello") is True
    before = sketch.to_bytes()
    assert sketch.add(b"hello") is False
    assert sketch.to_bytes() == before


def test_add_sets_one_register_within_bounds():
    sketch = HyperLogLog()
    sketch.add(b"element")
    nonzero = _nonzero(sketch)
    assert len(nonzero) == 1
    value = sketch.register(nonzero[0])
    assert 15 <= value <= HLL_REGISTER_MAX


def test_add_all_reports_updates():
    sketch = HyperLogLog()
    elements = _elements("a", 10)
    assert sketch.add_all(elements) is True
    assert sketch.add_all(elements) is False
    assert sketch.add_all(elements + [b"new-one"]) is True


def test_approximate_cardinality():
    sketch = HyperLogLog()
    n = 1000
    sketch.add_all(_elements("item", n))
    assert abs(sketch.count() - n) <= n * 0.05


def test_count_ignores_duplicates():
    once = HyperLogLog()
    twice = HyperLogLog()
    elements = _elements("dup", 200)
    once.add_all(elements)
    twice.add_all(elements + elements)
    assert once.count() == twice.count()


def test_dense_size():
    assert len(HyperLogLog().to_bytes()) == HLL_DENSE_SIZE
    assert HLL_DENSE_SIZE * 8 == HLL_REGISTERS * 6


def test_bytes_round_trip_random_registers():
    rng = random.Random(7)
    values = [rng.randint(0, HLL_REGISTER_MAX) for _ in range(HLL_REGISTERS)]
    sketch = HyperLogLog(values)
    decoded = HyperLogLog.from_bytes(sketch.to_bytes())
    assert [decoded.register(i) for i in range(HLL_REGISTERS)] == values
    assert decoded.to_bytes() == sketch.to_bytes()


def test_first_register_in_low_bits():
    values = [0] * HLL_REGISTERS
    values[0] = 1
    data = HyperLogLog(values).to_bytes()
    assert data[0] == 1
    assert set(data[1:]) == {0}


def test_round_trip_after_adds():
    sketch = HyperLogLog()
    sketch.add_all(_elements("rt", 500))
    restored = HyperLogLog.from_bytes(sketch.to_bytes())
    assert restored.count() == sketch.count()
    assert restored.to_bytes() == sketch.to_bytes()


def test_from_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        HyperLogLog.from_bytes(b"\x00" * (HLL_DENSE_SIZE - 1))


def test_init_rejects_wrong_register_count():
    with pytest.raises(ValueError):
        HyperLogLog([0] * (HLL_REGISTERS - 1))


def test_init_rejects_out_of_range_value():
    values = [0] * HLL_REGISTERS
    values[5] = HLL_REGISTER_MAX + 1
    with pytest.raises(ValueError):
        HyperLogLog(values)


def test_register_index_out_of_range():
    sketch = HyperLogLog()
    with pytest.raises(IndexError):
        sketch.register(HLL_REGISTERS)
    with pytest.raises(IndexError):
        sketch.register(-1)


def test_merge_matches_union():
    a_elems = _elements("a", 300)
    b_elems = _elements("b", 300)
    a = HyperLogLog()
    a.add_all(a_elems)
    b = HyperLogLog()
    b.add_all(b_elems)
    union = HyperLogLog()
    union.add_all(a_elems + b_elems)
    a.merge(b)
    assert a.to_bytes() == union.to_bytes()
    assert a.count() == union.count()


def test_merge_is_commutative():
    a = HyperLogLog()
    a.add_all(_elements("x", 100))
    b = HyperLogLog()
    b.add_all(_elements("y", 150))
    ab = HyperLogLog.from_bytes(a.to_bytes())
    ab.merge(b)
    ba = HyperLogLog.from_bytes(b.to_bytes())
    ba.merge(a)
    assert ab.to_bytes() == ba.to_bytes()


def test_merged_count():
    a = HyperLogLog()
    a.add_all(_elements("p", 120))
    b = HyperLogLog()
    b.add_all(_elements("q", 80))
    union = HyperLogLog()
    union.add_all(_elements("p", 120) + _elements("q", 80))
    assert merged_count([]) == 0
    assert merged_count([a]) == a.count()
    assert merged_count([a, b]) == union.count()
    assert merged_count(iter([b, a])) == union.count()


def test_merged_count_does_not_modify_inputs():
    a = HyperLogLog()
    a.add_all(_elements("m", 50))
    b = HyperLogLog()
    b.add_all(_elements("n", 50))
    before = a.to_bytes()
    merged_count([a, b])
    assert a.to_bytes() == before