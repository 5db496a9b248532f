"""
commitpilot config - Show or change settings.
"""

from dataclasses import asdict

from commitpilot.lib.config import ENV_KEYS, ConfigError, ConfigStore


def mask_secret(value: str) -> str:
    """Show only enough of a secret to recognise it."""
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}...{value[-4:]}"


def cmd_config_show(args, store: ConfigStore) -> int:
    config = store.load()
    print(f"Settings file: {store.path}")
    for field_name, value in asdict(config).items():
        if field_name == "api_key":
            value = mask_secret(value)
        elif isinstance(value, bool):
            value = "true" if value else "false"
        elif value == "":
            value = "(not set)"
        print(f"  {ENV_KEYS[field_name]}={value}")
    return 0


def cmd_config_set(args, store: ConfigStore) -> int:
    try:
        store.set_value(args.key, args.value)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 2

    shown = mask_secret(args.value) if args.key == ENV_KEYS["api_key"] else args.value
    print(f"Set {args.key}={shown}")
    return 0
