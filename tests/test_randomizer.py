from collections import Counter

from stackfall.game import TetrominoType, UniformRandomizer
from stackfall.game.randomizer import advance_queue, fill_queue


def test_same_seed_gives_same_sequence():
    a = UniformRandomizer(7)
    b = UniformRandomizer(7)
    assert [a.draw() for _ in range(50)] == [b.draw() for _ in range(50)]


def test_reseed_restarts_sequence():
    r = UniformRandomizer(3)
    first = [r.draw() for _ in range(20)]
    r.reseed(3)
    assert [r.draw() for _ in range(20)] == first


def test_draws_cover_all_kinds_and_allow_repeats():
    r = UniformRandomizer(1234)
    draws = [r.draw() for _ in range(7000)]
    counts = Counter(draws)
    assert set(counts) == set(TetrominoType)
    # Uniform: each kind near 1000
    assert all(800 < n < 1200 for n in counts.values())
    # No repetition avoidance
    assert any(a == b for a, b in zip(draws, draws[1:]))


def test_queue_pops_head_and_appends_draw():
    r = UniformRandomizer(5)
    queue = fill_queue(r, 3)
    assert len(queue) == 3
    head, rest = advance_queue(queue, r)
    assert head == queue[0]
    assert rest[:2] == queue[1:]
    assert len(rest) == 3
