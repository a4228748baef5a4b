"""YAML configuration loader.

Static defaults that are not secrets live in ``config/config.yaml``: the
summarizer system prompt, ElevenLabs voice settings and the quality-tier →
synthesis-model table.  Credentials and deploy-time knobs come from
:class:`src.config.settings.Settings` instead.

``load_config()`` layers the YAML file over the built-in defaults, so a
partial file only has to name the keys it changes.
"""

from pathlib import Path

import yaml

_DEFAULT_QUALITY_MODELS = {
    "standard": "eleven_monolingual_v1",
    "high": "eleven_monolingual_v1",
    "premium": "eleven_multilingual_v2",
}


def load_config(path: str = "config/config.yaml") -> dict:
    """Load the YAML config and merge it over the built-in defaults.

    Args:
        path: Path to the YAML configuration file.  A missing file yields
              the defaults alone.

    Returns:
        Configuration dictionary with ``speech`` and ``summarizer`` sections.
    """
    config: dict = {
        "speech": {"quality_models": dict(_DEFAULT_QUALITY_MODELS)},
        "summarizer": {},
    }
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            _deep_merge(config, yaml.safe_load(f) or {})
    return config


def quality_models(config: dict) -> dict[str, str]:
    """Return the quality-tier → synthesis-model table from a loaded config."""
    table = config.get("speech", {}).get("quality_models") or {}
    return {**_DEFAULT_QUALITY_MODELS, **table}


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
