import random

import pytest

from cachesim.policies import (
    FifoPolicy,
    LruPolicy,
    RandomPolicy,
    make_policy,
)


def test_fifo_cycles_through_ways():
    policy = FifoPolicy(2, 4)
    victims = [policy.choose_victim(1) for _ in range(8)]
    assert victims == list(range(4)) * 2


def test_fifo_sets_are_independent():
    policy = FifoPolicy(2, 3)
    policy.choose_victim(0)
    policy.choose_victim(0)
    assert policy.choose_victim(1) == 0
    assert policy.choose_victim(0) == 2


def test_lru_starts_with_way_zero():
    policy = LruPolicy(1, 4)
    assert policy.choose_victim(0) == 0


def test_lru_fills_ways_in_order_when_touched():
    policy = LruPolicy(1, 4)
    victims = []
    for _ in range(4):
        way = policy.choose_victim(0)
        victims.append(way)
        policy.touch(0, way)
    assert victims == list(range(4))
    # After a full round the oldest fill is chosen again.
    assert policy.choose_victim(0) == 0


def test_lru_touch_resets_only_given_way():
    policy = LruPolicy(2, 3)
    policy.touch(1, 2)
    assert policy.choose_victim(1) == 0
    assert policy.choose_victim(0) == 0
    policy.touch(1, 0)
    assert policy.choose_victim(1) == 1


def test_random_is_reproducible_and_in_range():
    first = RandomPolicy(1, 8, random.Random(42))
    second = RandomPolicy(1, 8, random.Random(42))
    a = [first.choose_victim(0) for _ in range(50)]
    b = [second.choose_victim(0) for _ in range(50)]
    assert a == b
    assert all(0 <= way < 8 for way in a)


@pytest.mark.parametrize(
    "name, cls",
    [("f", FifoPolicy), ("fifo", FifoPolicy), ("l", LruPolicy), ("lru", LruPolicy), ("r", RandomPolicy)],
)
def test_make_policy_uses_first_letter(name, cls):
    policy = make_policy(name, 4, 2, random.Random(0))
    assert type(policy) is cls
    assert policy.nsets == 4 and policy.assoc == 2


@pytest.mark.parametrize("name", ["", "x", "F", "mru"])
def test_make_policy_rejects_unknown(name):
    with pytest.raises(ValueError):
        make_policy(name, 4, 2, None)


def test_policy_rejects_bad_geometry():
    with pytest.raises(ValueError):
        FifoPolicy(0, 2)
    with pytest.raises(ValueError):
        LruPolicy(2, 0)