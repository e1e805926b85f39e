"""Breadth-first search over toggle patterns (part A)."""
from itertools import combinations
import pytest
import numpy as np
import factorypress as fp
from factorypress import TargetUnreachable, min_toggle_distance, toggle_distances


def brute_force_presses(light_count, masks, target):
    """Pressing a button twice cancels out, so some subset of buttons is optimal."""
    for size in range(len(masks) + 1):
        for subset in combinations(masks, size):
            state = 0
            for mask in subset:
                state ^= mask
            if state == target:
                return size
    return None


def test_single_light():
    machine = fp.parse_machine("[#] (0) {1}")
    assert (fp.min_toggle_presses(machine) == 1)


def test_example(example_machines):
    assert ([fp.min_toggle_presses(m) for m in example_machines] == [2, 3, 2])
    assert (fp.total_toggle_presses(example_machines) == 7)


def test_distance_to_start_is_zero():
    assert (toggle_distances(3, [0b001, 0b110])[0] == 0)
    assert (min_toggle_distance(3, [0b001, 0b110], 0) == 0)


def test_unreachable_target():
    machine = fp.parse_machine("[#.] (1) {0,0}")
    with pytest.raises(TargetUnreachable):
        fp.min_toggle_presses(machine)
    with pytest.raises(TargetUnreachable):
        fp.min_toggle_presses(machine, early_exit=False)


def test_button_twice_returns_to_start():
    """Every button mask is at distance 1, and pressing it again is never shorter than not pressing."""
    masks = [0b0011, 0b0110, 0b1100]
    dist = toggle_distances(4, masks)
    for mask in masks:
        assert (dist[mask] == 1)
        assert (dist[mask ^ mask] == 0)


def test_early_exit_agrees_with_exhaustive_search():
    rng = np.random.default_rng(10)
    for _ in range(40):
        lights = int(rng.integers(1, 7))
        masks = [int(m) for m in rng.integers(0, 1 << lights, size=int(rng.integers(1, 6)))]
        exhaustive = toggle_distances(lights, masks)
        for target in range(1 << lights):
            expected = brute_force_presses(lights, masks, target)
            assert (exhaustive[target] == expected)
            if expected is None:
                with pytest.raises(TargetUnreachable):
                    min_toggle_distance(lights, masks, target)
            else:
                assert (min_toggle_distance(lights, masks, target, early_exit=True) == expected)


def test_patterns_wider_than_lights():
    with pytest.raises(ValueError):
        min_toggle_distance(2, [0b01], 0b100)
    with pytest.raises(ValueError):
        min_toggle_distance(2, [0b01], -1)
    with pytest.raises(ValueError):
        toggle_distances(2, [0b100])
