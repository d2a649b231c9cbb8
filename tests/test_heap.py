import pytest

from heap.heap_model import MaxHeapModel, MinHeapModel, create_heap


def test_min_heap_scenario():
    heap = MinHeapModel()
    for value in (5, 3, 8):
        heap.insert(value)
    trace = heap.insert(1)

    assert heap.to_array() == [1, 3, 8, 5]
    assert trace.path == [3, 1, 0]
    assert trace.swapped == [(3, 1), (1, 0)]
    assert not trace.has_value

    trace = heap.remove()
    assert trace.value == 1
    assert trace.has_value
    assert heap.to_array() == [3, 5, 8]
    assert trace.path == [0, 1]
    assert trace.swapped == [(0, 1)]


def test_remove_from_empty_heap():
    trace = MinHeapModel().remove()
    assert not trace.has_value
    assert trace.path == []
    assert trace.swapped == []


def test_remove_last_element():
    heap = MaxHeapModel()
    heap.insert(7)
    trace = heap.remove()
    assert trace.value == 7
    assert heap.length == 0
    assert heap.peek() is None


def test_insert_stops_at_first_non_outranking_parent():
    heap = MinHeapModel()
    heap.create_from_iterable([1, 2, 3])
    trace = heap.insert(4)
    assert trace.path == [3, 1]
    assert trace.swapped == []


@pytest.mark.parametrize("kind, order", [("min", sorted), ("max", lambda v: sorted(v, reverse=True))])
def test_drain_yields_sorted_values(rng, kind, order):
    values = [rng.randrange(100) for _ in range(60)]
    heap = create_heap(kind)
    heap.create_from_iterable(values)

    drained = []
    while len(heap):
        drained.append(heap.remove().value)
    assert drained == order(values)


def test_heap_property_holds_after_each_step(rng):
    heap = MaxHeapModel()
    for _ in range(200):
        if heap.length and rng.random() < 0.3:
            heap.remove()
        else:
            heap.insert(rng.randrange(50))
        data = heap.to_array()
        for index in range(1, len(data)):
            assert data[(index - 1) // 2] >= data[index]


def test_converted_rebuilds_in_array_order():
    heap = MinHeapModel()
    heap.create_from_iterable([5, 3, 8, 1])
    flipped = heap.converted("max")
    assert flipped.kind == "max"
    assert flipped.peek() == 8
    assert sorted(flipped.to_array()) == [1, 3, 5, 8]
    # source is untouched
    assert heap.to_array() == [1, 3, 8, 5]


def test_unknown_kind():
    with pytest.raises(ValueError):
        create_heap("median")
