from __future__ import annotations

import random

from neonslither.particles import ParticlePool


def test_burst_never_exceeds_capacity() -> None:
    pool = ParticlePool(capacity=5, rng=random.Random(3))
    assert pool.emit_burst((2, 2), (255, 0, 255), 15) == 5
    assert pool.emit_burst((3, 3), (255, 0, 255), 15) == 0
    assert pool.active_count == 5
    assert len(list(pool.active_slots())) == 5
    assert pool.acquire() is None


def test_release_makes_slot_reusable_once() -> None:
    pool = ParticlePool(capacity=2)
    first = pool.acquire()
    second = pool.acquire()
    assert first is not None and second is not None
    pool.release(first)
    pool.release(first)
    assert pool.active_count == 1
    again = pool.acquire()
    assert again is first
    assert pool.acquire() is None


def test_update_moves_and_retires_particles() -> None:
    pool = ParticlePool(capacity=4, rng=random.Random(9))
    pool.emit_burst((1, 1), (0, 242, 255), 4)
    before = [(p.x, p.y) for p in pool.active_slots()]
    pool.update(fade=0.5)
    after = [(p.x, p.y) for p in pool.active_slots()]
    assert pool.active_count == 4
    assert before != after
    pool.update(fade=0.5)
    assert pool.active_count == 0


def test_pool_churn_stays_bounded() -> None:
    pool = ParticlePool(capacity=30, rng=random.Random(1))
    for _ in range(100):
        pool.emit_burst((0, 0), (1, 2, 3), 15)
        assert pool.active_count <= pool.capacity
        pool.update(fade=0.3)
