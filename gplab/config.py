"""Default configurations and presets.

Configurations are plain dicts read with ``config.get(key, default)``. The
presets cover common scales: ``PRESET_MINIMAL`` for quick checks and tests,
``PRESET_STANDARD`` for interactive runs, ``PRESET_RESEARCH`` for sweeps.
"""

from __future__ import annotations

from typing import Any, Mapping

from gplab.utils.validation import ValidationError, validate_ga_config, validate_perceptron_config

DEFAULT_GA_CONFIG: dict[str, Any] = {
    'population_size': 50,
    'max_generations': 100,
    'mutation_rate': 0.1,
    'crossover_rate': 0.8,
    'elite_size': 5,
    'tournament_size': 3,
    'selection_method': 'tournament',
    'crossover_method': 'uniform',
    'chromosome_length': None,
}

DEFAULT_PERCEPTRON_CONFIG: dict[str, Any] = {
    'learning_rate': 0.1,
    'max_epochs': 1000,
    'target_error': 0.01,
    'weight_range': 0.5,
    'activation_threshold': 0.5,
    'min_samples': 2,
}

DEFAULT_GRAPH_CONFIG: dict[str, Any] = {
    'size': 8,
    'max_weight': 10,
    'connection_probability': 0.7,
}

PRESET_MINIMAL: dict[str, Any] = {
    'ga': {'population_size': 20, 'max_generations': 30, 'elite_size': 2},
    'perceptron': {'max_epochs': 100},
    'graph': {'size': 5},
}

PRESET_STANDARD: dict[str, Any] = {
    'ga': dict(DEFAULT_GA_CONFIG),
    'perceptron': dict(DEFAULT_PERCEPTRON_CONFIG),
    'graph': dict(DEFAULT_GRAPH_CONFIG),
}

PRESET_RESEARCH: dict[str, Any] = {
    'ga': {'population_size': 200, 'max_generations': 200, 'elite_size': 10, 'tournament_size': 5},
    'perceptron': {'max_epochs': 5000, 'target_error': 0.001},
    'graph': {'size': 16},
}

_VALIDATORS = {
    'ga': validate_ga_config,
    'perceptron': validate_perceptron_config,
}

_DEFAULTS = {
    'ga': DEFAULT_GA_CONFIG,
    'perceptron': DEFAULT_PERCEPTRON_CONFIG,
    'graph': DEFAULT_GRAPH_CONFIG,
}


def merge_config(base: Mapping[str, Any], overrides: Mapping[str, Any] | None = None, *, section: str = 'ga') -> dict[str, Any]:
    """Overlay ``overrides`` on ``base`` and validate the result.

    Unknown keys are rejected so that typos do not silently fall back to
    defaults.
    """
    merged = dict(base)
    for key, value in (overrides or {}).items():
        if key not in merged:
            raise ValidationError('unknown_config_key', f"Unknown {section} config key: {key}", key=key)
        merged[key] = value
    validator = _VALIDATORS.get(section)
    if validator is not None:
        validator(merged)
    return merged


def get_preset(name: str) -> dict[str, dict[str, Any]]:
    """Return fully merged sections for a preset name (minimal/standard/research)."""
    presets = {
        'minimal': PRESET_MINIMAL,
        'standard': PRESET_STANDARD,
        'research': PRESET_RESEARCH,
    }
    try:
        preset = presets[name.lower()]
    except KeyError:
        raise ValidationError('unknown_preset', f"Unknown preset: {name}", name=name) from None
    return {sec: merge_config(_DEFAULTS[sec], preset.get(sec), section=sec) for sec in _DEFAULTS}


__all__ = [
    'DEFAULT_GA_CONFIG',
    'DEFAULT_PERCEPTRON_CONFIG',
    'DEFAULT_GRAPH_CONFIG',
    'PRESET_MINIMAL',
    'PRESET_STANDARD',
    'PRESET_RESEARCH',
    'merge_config',
    'get_preset',
]
