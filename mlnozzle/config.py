"""YAML configuration loading with inheritance.

Supports a `base:` key for config inheritance with deep merge, so a family
of designs can share table settings and override only what differs.
"""

import copy
from pathlib import Path

import numpy as np
import yaml

from mlnozzle.design import DesignParameters
from mlnozzle.table import DEFAULT_MAX_MACH

DEFAULT_OUTPUTS = ['points', 'contour', 'plot']


def _deep_merge(base, overrides):
    """Recursively merge overrides into base dict.

    - Scalars in overrides replace base values
    - Dicts are merged recursively
    - None values in overrides remove the key
    """
    result = copy.deepcopy(base)
    for key, value in overrides.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _resolve_config(name, all_raw, resolved_cache, chain=()):
    """Resolve a single config, following base references."""
    if name in resolved_cache:
        return resolved_cache[name]
    if name in chain:
        raise ValueError(
            f"Config inheritance cycle: {' -> '.join(chain + (name,))}")

    raw = all_raw[name]
    if 'base' in raw:
        base_name = raw['base']
        if base_name not in all_raw:
            raise ValueError(f"Config '{name}' references unknown base '{base_name}'")
        base_resolved = _resolve_config(base_name, all_raw, resolved_cache,
                                        chain + (name,))
        overrides = {k: v for k, v in raw.items() if k != 'base'}
        resolved = _deep_merge(base_resolved, overrides)
    else:
        resolved = copy.deepcopy(raw)

    resolved_cache[name] = resolved
    return resolved


def load_config(path):
    """Load nozzle design configurations from YAML.

    Supports:
    - Single config: `nozzle:` top-level key
    - Multiple configs: `configs:` top-level key with inheritance
    - Output control: `outputs:` list

    Parameters
    ----------
    path : str or Path
        Path to YAML config file.

    Returns
    -------
    dict with keys:
        configs : dict of {name: resolved_config}
        outputs : list of output types
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raise ValueError(f"Empty config file: {path}")

    if 'nozzle' in raw and 'configs' not in raw:
        configs_raw = {'default': raw['nozzle']}
    elif 'configs' in raw:
        configs_raw = raw['configs']
    else:
        configs_raw = {'default': {k: v for k, v in raw.items() if k != 'outputs'}}

    resolved_cache = {}
    configs = {name: _resolve_config(name, configs_raw, resolved_cache)
               for name in configs_raw}

    return {
        'configs': configs,
        'outputs': raw.get('outputs', list(DEFAULT_OUTPUTS)),
    }


def _parse_length(value):
    """Parse a length value with optional unit suffix.

    Supports: mm, cm, m, in, ft.  Plain numbers are treated as mm.
    Returns value in meters.
    """
    if isinstance(value, (int, float)):
        return float(value) * 1e-3

    s = str(value).strip()
    units = {'mm': 1e-3, 'cm': 1e-2, 'm': 1.0,
             'in': 0.0254, 'ft': 0.3048}
    for suffix, factor in sorted(units.items(), key=lambda x: -len(x[0])):
        if s.endswith(suffix):
            return float(s[:-len(suffix)].strip()) * factor
    return float(s) * 1e-3


def build_design_parameters(cfg):
    """Convert a resolved config dict into DesignParameters.

    `theta_min_deg` wins over `theta_min` (radians) when both are given.
    """
    if 'theta_min_deg' in cfg:
        theta_min = float(np.radians(float(cfg['theta_min_deg'])))
    elif 'theta_min' in cfg:
        theta_min = float(cfg['theta_min'])
    else:
        theta_min = float(np.radians(0.375))

    return DesignParameters(
        gamma=float(cfg.get('gamma', 1.4)),
        exit_mach=float(cfg.get('M_exit', 2.0)),
        table_min_mach=float(cfg.get('table_min_mach', 1.0)),
        table_mach_step=float(cfg.get('table_mach_step', 1e-4)),
        table_max_mach=float(cfg.get('table_max_mach', DEFAULT_MAX_MACH)),
        theta_min=theta_min,
        n_chars=int(cfg.get('n_chars', 7)),
    )


def build_output_options(cfg):
    """Presentation settings that do not affect the design itself."""
    throat_radius_m = None
    if 'throat_radius' in cfg:
        throat_radius_m = _parse_length(cfg['throat_radius'])
    return {
        'decimal_places': int(cfg.get('decimal_places', 4)),
        'throat_radius_m': throat_radius_m,
    }
