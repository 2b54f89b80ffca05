"""
Signal and mapped signal tests

Dispatchers apply their action to the current model and write the result
back exactly once; mapped signals patch one key and leave siblings alone.
"""

from dataclasses import dataclass

import pytest

from starflow import Dispatcher, InvalidKey, MappedSignal, Model, create_signal, map_signal


class Counter(Model):
    count: int = 0
    label: str = 'clicks'


class State(Model):
    counter: Counter
    title: str = 'demo'


def add(model, amount):
    return model + amount


def increment(model):
    return model + 1


def test_dispatch_applies_action_with_bound_args(cell, signal):
    cell.model = 10
    dispatcher = signal(add, 5)

    assert isinstance(dispatcher, Dispatcher)
    assert cell.writes == 0

    dispatcher()
    assert cell.model == 15
    assert cell.writes == 1


def test_call_args_follow_bound_args(cell, signal):
    cell.model = []

    def record(model, *args):
        return model + [args]

    signal(record, 'a', 'b')('c')
    assert cell.model == [('a', 'b', 'c')]


def test_call_kwargs_override_bound_kwargs(cell, signal):
    cell.model = {}

    def configure(model, **options):
        return {**model, **options}

    dispatcher = signal(configure, color='red', size=1)
    dispatcher(size=3)
    assert cell.model == {'color': 'red', 'size': 3}


def test_dispatcher_reads_model_at_call_time(cell, signal):
    cell.model = 0
    bump = signal(increment)

    bump()
    bump()
    cell.model = 100
    bump()
    assert cell.model == 101
    assert cell.writes == 3


def test_action_error_propagates_without_write(cell, signal):
    cell.model = 1

    def explode(model):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        signal(explode)()

    assert cell.model == 1
    assert cell.writes == 0


def test_arity_mismatch_surfaces_as_type_error(cell, signal):
    cell.model = 0
    with pytest.raises(TypeError):
        signal(add)()
    assert cell.writes == 0


def test_mapped_signal_patches_only_its_key(cell, signal):
    profile = {'name': 'ada'}
    cell.model = {'counter': 1, 'profile': profile}

    signal.map('counter')(add, 4)()

    assert cell.model == {'counter': 5, 'profile': profile}
    assert cell.model['profile'] is profile


def test_mapped_signal_does_not_mutate_parent(cell, signal):
    original = {'counter': 1, 'other': 2}
    cell.model = original

    signal.map('counter')(increment)()

    assert original == {'counter': 1, 'other': 2}
    assert cell.model is not original


def test_chained_mapping_preserves_siblings_at_every_level(cell, signal):
    sibling_b = {'deep': True}
    sibling_top = ['x']
    cell.model = {'a': {'b': 1, 'c': sibling_b}, 'd': sibling_top}

    signal.map('a').map('b')(add, 2)()

    assert cell.model == {'a': {'b': 3, 'c': sibling_b}, 'd': sibling_top}
    assert cell.model['a']['c'] is sibling_b
    assert cell.model['d'] is sibling_top
    assert cell.writes == 1


def test_missing_key_passes_none(cell, signal):
    cell.model = {'present': 1}
    seen = []

    def observe(sub):
        seen.append(sub)
        return 'set'

    signal.map('missing')(observe)()

    assert seen == [None]
    assert cell.model == {'present': 1, 'missing': 'set'}


def test_chained_mapping_through_missing_key_builds_mapping(cell, signal):
    cell.model = {}
    signal.map('a').map('b')(lambda sub: 1)()
    assert cell.model == {'a': {'b': 1}}


def test_mapped_signal_on_frozen_model(cell, signal):
    cell.model = State(counter=Counter())

    signal.map('counter').map('count')(add, 3)()

    assert cell.model.counter.count == 3
    assert cell.model.counter.label == 'clicks'
    assert cell.model.title == 'demo'


def test_mapped_signal_on_dataclass(cell, signal):
    @dataclass(frozen=True)
    class Point:
        x: int
        y: int

    cell.model = Point(1, 2)
    signal.map('x')(add, 10)()
    assert cell.model == Point(11, 2)


def test_mapped_unknown_dataclass_field_rejected_before_action(cell, signal):
    @dataclass(frozen=True)
    class Point:
        x: int
        y: int

    calls = []

    def record(value):
        calls.append(value)
        return 0

    cell.model = Point(1, 2)
    with pytest.raises(InvalidKey, match="no field 'z'"):
        signal.map('z')(record)()

    assert calls == []
    assert cell.model == Point(1, 2)
    assert cell.writes == 0


def test_mapped_signal_on_list_index(cell, signal):
    cell.model = {'items': [1, 2, 3]}
    signal.map('items').map(1)(add, 40)()
    assert cell.model == {'items': [1, 42, 3]}


def test_map_signal_function_matches_method(signal):
    mapped = map_signal(signal, 'a')
    assert isinstance(mapped, MappedSignal)
    assert mapped.parent is signal
    assert mapped.key == 'a'
    assert signal.map('a').map('b').path == ('a', 'b')
    assert signal.path == ()


def test_signal_repr_shows_path(signal):
    assert repr(signal) == 'Signal(<root>)'
    assert repr(signal.map('a').map('b')) == 'MappedSignal(a.b)'


def test_create_signal_over_closure():
    state = {'model': 0}

    def set_model(value):
        state['model'] = value

    signal = create_signal(lambda: state['model'], set_model)
    signal(add, 2)()
    signal(add, 3)()
    assert state['model'] == 5
