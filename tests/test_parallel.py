import io
import math

import pytest

from chunkwork.parallel import (
    approximate_pi,
    binomial_broadcast_schedule,
    distribute_rows,
    flat_tree_reduce,
    mat_vec,
    partial_pi_sum,
    pi_main,
)


@pytest.mark.parametrize("workers", [1, 2, 3, 7])
def test_approximate_pi_is_close(workers):
    assert abs(approximate_pi(10000, workers) - math.pi) < 1e-6


def test_approximate_pi_independent_of_workers():
    single = approximate_pi(1000, 1)
    for workers in (2, 4, 5, 13):
        assert approximate_pi(1000, workers) == pytest.approx(single, rel=1e-12)


def test_approximate_pi_improves_with_intervals():
    coarse = abs(approximate_pi(10, 2) - math.pi)
    fine = abs(approximate_pi(1000, 2) - math.pi)
    assert fine < coarse


@pytest.mark.parametrize("intervals, workers", [(0, 1), (-5, 2), (10, 0)])
def test_approximate_pi_rejects_bad_arguments(intervals, workers):
    with pytest.raises(ValueError):
        approximate_pi(intervals, workers)


def test_partial_sums_add_up_to_whole():
    whole = partial_pi_sum(100, 0, 1)
    parts = [partial_pi_sum(100, rank, 6) for rank in range(6)]
    assert sum(parts) == pytest.approx(whole, rel=1e-12)


def test_partial_sum_of_rank_with_no_intervals_is_zero():
    assert partial_pi_sum(3, 4, 5) == 0.0


def test_partial_sum_rejects_bad_rank():
    with pytest.raises(ValueError):
        partial_pi_sum(10, 3, 3)


def test_binomial_schedule_for_eight():
    assert binomial_broadcast_schedule(8, 0) == [
        [(0, 1)],
        [(0, 2), (1, 3)],
        [(0, 4), (1, 5), (2, 6), (3, 7)],
    ]


def test_binomial_schedule_single_rank_has_no_rounds():
    assert binomial_broadcast_schedule(1, 0) == []


@pytest.mark.parametrize("size, root", [(2, 0), (5, 0), (6, 2), (13, 12), (16, 7)])
def test_binomial_schedule_reaches_everyone_once(size, root):
    holders = {root}
    received = []
    for sends in binomial_broadcast_schedule(size, root):
        senders = {sender for sender, _ in sends}
        assert senders <= holders
        for _, receiver in sends:
            received.append(receiver)
        holders.update(receiver for _, receiver in sends)
    assert sorted(received) == sorted(set(range(size)) - {root})
    assert holders == set(range(size))


def test_binomial_schedule_rejects_bad_root():
    with pytest.raises(ValueError):
        binomial_broadcast_schedule(4, 4)


def test_flat_tree_reduce_sums_values():
    assert flat_tree_reduce([1.5, 2.5, 3.0], 0) == 7.0
    assert flat_tree_reduce([1.0, 2.0, 4.0], 2) == 7.0


def test_flat_tree_reduce_rejects_empty():
    with pytest.raises(ValueError):
        flat_tree_reduce([], 0)


def test_distribute_rows_even_split():
    assert distribute_rows(6, 3) == (2, 0)


def test_distribute_rows_padding_covers_matrix():
    for n in range(0, 20):
        for size in range(1, 8):
            rows, padding = distribute_rows(n, size)
            assert rows * size == n + padding
            assert 0 <= padding < size


def test_distribute_rows_rejects_bad_size():
    with pytest.raises(ValueError):
        distribute_rows(5, 0)


@pytest.mark.parametrize("workers", [1, 2, 3, 5, 8])
def test_mat_vec_identity_returns_vector(workers):
    vector = [float(v) for v in range(5)]
    identity = [[1.0 if i == j else 0.0 for j in range(5)] for i in range(5)]
    assert mat_vec(identity, vector, workers) == vector


def test_mat_vec_same_for_any_worker_count():
    matrix = [[float(i) for _ in range(5)] for i in range(5)]
    vector = [float(j) for j in range(5)]
    single = mat_vec(matrix, vector, 1)
    assert len(single) == 5
    for workers in (2, 3, 4, 6):
        assert mat_vec(matrix, vector, workers) == single


def test_mat_vec_rejects_mismatch():
    with pytest.raises(ValueError):
        mat_vec([[1.0, 2.0]], [1.0, 2.0], 2)


def test_pi_main_prints_approximation(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1000\n0\n"))
    assert pi_main(["3"]) == 0
    out = capsys.readouterr().out
    assert "<> pi is approximately 3.14159" in out
    assert out.count("Enter the number of intervals") == 2


def test_pi_main_rejects_bad_worker_count(capsys):
    assert pi_main(["zero"]) == 2
    assert "is not an integer > 0" in capsys.readouterr().out


def test_pi_main_stops_on_bad_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("abc\n"))
    assert pi_main([]) == 1
    assert "is not a valid integer" in capsys.readouterr().out