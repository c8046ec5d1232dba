import csv
from dataclasses import dataclass

import pytest

from gplab.config import DEFAULT_GA_CONFIG, get_preset, merge_config
from gplab.core.cost import UNREACHABLE, Finite
from gplab.utils.observability import StepEvent, determinism_signature, write_history_csv
from gplab.utils.rng_manager import RNGManager
from gplab.utils.validation import ValidationError, validate_dataset


def test_context_streams_are_reproducible_and_independent():
    a, b = RNGManager(seed=123), RNGManager(seed=123)
    # request order must not matter
    b.get_context_rng("mutation")
    assert [a.get_rng_for_selection().random() for _ in range(3)] == [
        b.get_rng_for_selection().random() for _ in range(3)
    ]
    assert a.get_context_rng("x").random() != a.get_context_rng("y").random()


def test_rng_state_round_trip():
    m = RNGManager(seed=9)
    m.get_rng_for_crossover().random()
    state = m.get_state()
    expected = m.get_rng_for_crossover().random()
    restored = RNGManager(seed=0)
    restored.set_state(state)
    assert restored.seed == 9
    assert restored.get_rng_for_crossover().random() == expected


def test_merge_config_rejects_unknown_keys_and_bad_values():
    assert merge_config(DEFAULT_GA_CONFIG, {'elite_size': 2})['elite_size'] == 2
    with pytest.raises(ValidationError) as exc:
        merge_config(DEFAULT_GA_CONFIG, {'mutation': 0.1})
    assert exc.value.code == 'unknown_config_key'
    with pytest.raises(ValidationError) as exc:
        merge_config(DEFAULT_GA_CONFIG, {'crossover_method': 'three_point'})
    assert exc.value.code == 'unknown_crossover_method'
    assert 'three_point' in str(exc.value)


def test_presets_are_complete_configs():
    minimal = get_preset('minimal')
    assert minimal['ga']['population_size'] == 20
    assert minimal['ga']['mutation_rate'] == DEFAULT_GA_CONFIG['mutation_rate']
    assert set(minimal) == {'ga', 'perceptron', 'graph'}
    with pytest.raises(ValidationError):
        get_preset('huge')


def test_validate_dataset_rejects_empty_and_mismatched():
    @dataclass
    class _S:
        pixels: tuple

    with pytest.raises(ValidationError) as exc:
        validate_dataset([])
    assert exc.value.code == 'not_enough_samples'
    with pytest.raises(ValidationError) as exc:
        validate_dataset([_S((0, 1)), _S((0, 1, 1))])
    assert exc.value.code == 'mismatched_sample_lengths'
    assert validate_dataset([_S((0, 1)), _S((1, 1))]) == 2


def test_determinism_signature_handles_costs():
    s1 = determinism_signature({'a': Finite(1.5), 'b': UNREACHABLE})
    s2 = determinism_signature({'b': UNREACHABLE, 'a': Finite(1.5)})
    assert s1 == s2
    assert s1 != determinism_signature({'a': Finite(1.6), 'b': UNREACHABLE})


def test_write_history_csv(tmp_path):
    @dataclass
    class _Row:
        generation: int
        best: object

    out = write_history_csv(tmp_path / "h.csv", [_Row(1, Finite(2.5)), _Row(2, UNREACHABLE)])
    with open(out, newline="") as f:
        rows = list(csv.DictReader(f))
    assert rows[0] == {'generation': '1', 'best': '2.5'}
    assert rows[1]['best'] == 'inf'


def test_step_event_is_frozen():
    ev = StepEvent('initialization', 0, None, None)
    with pytest.raises(Exception):
        ev.generation = 3  # type: ignore[misc]
