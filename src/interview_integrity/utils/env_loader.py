"""
Minimal .env loader.

Reads KEY=VALUE pairs from a .env file in the current working directory
and exports them into os.environ. Values from the file override values
already present in the environment.
"""
import os
from pathlib import Path
from typing import Dict, Optional, Union


def load_env(env_file: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    """
    Load environment variables from a .env file.

    Args:
        env_file: Path to the file. Defaults to ".env" in the current directory.

    Returns:
        Dictionary of the variables that were loaded (empty if no file).
    """
    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if not env_path.is_file():
        return {}

    loaded = {}
    with open(env_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            # Skip blanks, comments and lines without an assignment
            if not line or line.startswith('#') or '=' not in line:
                continue

            key, value = line.split('=', 1)
            key = key.strip()
            if not key:
                continue

            # Quotes are kept as part of the value
            os.environ[key] = value.strip()
            loaded[key] = value.strip()

    return loaded
