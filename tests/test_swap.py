import pytest

from chunkwork.swap import Counters, SwapOptions, main, parse_swap_options, run_swap


def test_defaults_when_no_arguments():
    options = parse_swap_options([])
    assert options == SwapOptions(num_threads=4, size=10, iterations=100000)


def test_short_options():
    options = parse_swap_options(["-t", "2", "-s", "5", "-i", "300"])
    assert (options.num_threads, options.size, options.iterations) == (2, 5, 300)


def test_long_options():
    options = parse_swap_options(["--threads=3", "--size=7", "--iterations=50"])
    assert (options.num_threads, options.size, options.iterations) == (3, 7, 50)


@pytest.mark.parametrize("flag", ["-t", "-s"])
@pytest.mark.parametrize("value", ["0", "abc", "-4"])
def test_threads_and_size_must_be_positive(flag, value):
    with pytest.raises(ValueError, match="is not an integer > 0"):
        parse_swap_options([flag, value])


def test_non_numeric_iterations_reads_as_zero():
    assert parse_swap_options(["-i", "abc"]).iterations == 0


def test_help_exits_with_zero(capsys):
    with pytest.raises(SystemExit) as info:
        parse_swap_options(["-h"])
    assert info.value.code == 0
    assert "Usage:  swap" in capsys.readouterr().out


def test_unknown_option_exits_with_zero():
    with pytest.raises(SystemExit) as info:
        parse_swap_options(["-x"])
    assert info.value.code == 0


def test_positional_arguments_rejected():
    with pytest.raises(ValueError, match="Too many arguments"):
        parse_swap_options(["-t", "2", "extra"])


def test_counters_start_state():
    counters = Counters(4, 25)
    assert counters.increase == [0, 0, 0, 0]
    assert counters.decrease == [25, 25, 25, 25]
    assert counters.totals() == (0, 100, 0)


def test_counters_reject_empty_array():
    with pytest.raises(ValueError):
        Counters(0, 10)


def test_run_swap_conserves_total_and_counts_iterations(capsys):
    options = SwapOptions(num_threads=3, size=6, iterations=2000)
    counters = run_swap(options)
    total_increase, total_decrease, diff = counters.totals()
    assert diff == 0
    assert total_increase + total_decrease == options.size * options.iterations
    assert counters.iterations_done == options.iterations
    assert capsys.readouterr().out.count("creating 3 threads") == 2


def test_run_swap_with_zero_iterations_leaves_counters_untouched():
    counters = run_swap(SwapOptions(num_threads=2, size=3, iterations=0))
    assert counters.increase == [0, 0, 0]
    assert counters.decrease == [0, 0, 0]
    assert counters.iterations_done == 0


def test_run_swap_needs_two_slots():
    with pytest.raises(ValueError):
        run_swap(SwapOptions(num_threads=1, size=1, iterations=10))


def test_main_prints_final_totals(capsys):
    assert main(["-t", "2", "-s", "4", "-i", "500"]) == 0
    out = capsys.readouterr().out
    final = [line for line in out.splitlines() if line.startswith("Final:")]
    assert len(final) == 1
    assert final[0].endswith("diff 0")


def test_main_reports_bad_value(capsys):
    assert main(["-t", "zero"]) == 3
    assert "'zero': is not an integer > 0" in capsys.readouterr().out