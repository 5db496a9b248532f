"""
Safe .env file parser.

Parses KEY=value files without shell execution.
Rejects dangerous patterns that could enable injection.
"""

import re
from pathlib import Path

FORBIDDEN_PATTERNS = [
    r'`',           # backticks
    r'\$\(',        # command substitution
    r'\$\{',        # variable expansion
    r';',           # command chaining
    r'&&',          # AND chaining
    r'\|\|',        # OR chaining
    r'\|',          # pipe
]

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')


def _check_value(value: str, where: str) -> None:
    for pattern in FORBIDDEN_PATTERNS:
        if re.search(pattern, value):
            raise ValueError(f"{where}: Forbidden pattern in value")


def load_env(filepath: str) -> dict:
    """
    Parse env file safely, return dict.

    Raises:
        FileNotFoundError: if file doesn't exist
        ValueError: if syntax invalid or forbidden pattern found
    """
    result = {}
    path = Path(filepath)

    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {filepath}")

    for lineno, line in enumerate(path.read_text().splitlines(), 1):
        line = line.strip()

        # Skip empty and comments
        if not line or line.startswith('#'):
            continue

        if '=' not in line:
            raise ValueError(f"Line {lineno}: Invalid syntax (no '=')")

        key, _, value = line.partition('=')
        key = key.strip()
        value = value.strip()

        if not KEY_PATTERN.match(key):
            raise ValueError(f"Line {lineno}: Invalid key '{key}'")

        # Strip quotes if present
        if len(value) >= 2:
            if (value.startswith('"') and value.endswith('"')) or \
               (value.startswith("'") and value.endswith("'")):
                value = value[1:-1]

        _check_value(value, f"Line {lineno}")

        result[key] = value

    return result


def write_env(filepath: str, values: dict) -> None:
    """
    Write a dict as a KEY="value" env file that load_env can read back.

    Raises:
        ValueError: if a key is invalid or a value could not be loaded safely
    """
    lines = []
    for key, value in values.items():
        if not KEY_PATTERN.match(key):
            raise ValueError(f"Invalid key '{key}'")
        value = str(value)
        if '"' in value or '\n' in value:
            raise ValueError(f"Key {key}: value must not contain quotes or newlines")
        _check_value(value, f"Key {key}")
        lines.append(f'{key}="{value}"')

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n")
