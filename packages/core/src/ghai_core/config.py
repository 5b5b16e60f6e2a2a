import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "model": "openai",  # openai | ollama | anthropic (aliases: gpt, local, claude)
    "language": "zh",  # zh | en: language of generated text and expected response headers
    "repo": None,  # default owner/name for review and issue commands
    "review_focus": "all",
    "approve_threshold": 80,  # review score at or above which --comment posts APPROVE
    "commit_style": "conventional",
    "explain_detail": "detailed",
}

# Environment variable → config key. Only set variables override.
_ENV_KEYS = {
    "OPENAI_API_KEY": "openai_api_key",
    "OPENAI_BASE_URL": "openai_base_url",
    "OPENAI_MODEL": "openai_model",
    "ANTHROPIC_API_KEY": "anthropic_api_key",
    "OLLAMA_BASE_URL": "ollama_base_url",
    "OLLAMA_MODEL": "ollama_model",
}


def load_config(config_path: str = ".ghai.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .ghai.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Environment variables win over file values for credentials and endpoints.
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    for env_name, key in _ENV_KEYS.items():
        value = os.environ.get(env_name)
        if value:
            config[key] = value
        else:
            config.setdefault(key, None)

    return config
