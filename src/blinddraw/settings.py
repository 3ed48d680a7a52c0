"""
Tournament settings stored as YAML.
"""
import os

import yaml

from blinddraw.elimination import LOWER_COURTS, UPPER_COURTS


def get_default_settings():
    """Return default settings."""
    return {
        'strict': True,
        'rounds_to_generate': 1,
        'start_court': 1,
        'upper_size': None,  # None: half of the guys roster
        'pairing_window': 4,
        'randomize_within_window': True,
        'byes_upper': 0,
        'byes_lower': 0,
        'redemption_randomize_partners': False,
        'upper_courts': list(UPPER_COURTS),
        'lower_courts': list(LOWER_COURTS),
    }


def load_settings(path):
    """Load settings from YAML file, merging with defaults."""
    defaults = get_default_settings()
    if not os.path.exists(path):
        return defaults
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
        if not data:
            return defaults
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")
        # Merge with defaults to ensure all keys exist
        for key, value in defaults.items():
            if key not in data:
                data[key] = value
        return data


def save_settings(settings, path):
    """Save settings to YAML file."""
    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(settings, f, default_flow_style=False)
