# config_manager.py
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent / "config.json"
ui_strings = Path(__file__).resolve().parent / "ui_strings.json"

DEFAULT_SETTINGS = {
    "darkmode": False,
    "history_limit": 50,
    "after_paste_enter": False,
    "debug": False,
}

# Integer settings and their smallest allowed value
MINIMUM_VALUES = {
    "history_limit": 1,
}


def _read_json(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

    # ValueError covers both broken JSON and undecodable bytes
    except (OSError, ValueError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object, got %s", path, type(data).__name__)
        return {}
    return data


def load_setting_value(key_value, path=None):
    settings_dict = dict(DEFAULT_SETTINGS)
    settings_dict.update(_read_json(path or config_json))

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value, path=None):
    descriptions = _read_json(path or ui_strings)

    if key_value == "all":
        return descriptions

    else:
        return descriptions.get(key_value, key_value)


def validate_setting(key_value, new_value):
    """Return the value to store, raising ValueError if it is not acceptable."""
    default = DEFAULT_SETTINGS.get(key_value)

    if isinstance(default, bool):
        if not isinstance(new_value, bool):
            raise ValueError(f"'{new_value}' is not True or False.")
        return new_value

    if isinstance(default, int):
        new_value_int = int(new_value)
        minimum = MINIMUM_VALUES.get(key_value)
        if minimum is not None and new_value_int < minimum:
            raise ValueError(f"'{new_value_int}' is too small. Minimum is {minimum}.")
        return new_value_int

    return new_value


def save_setting(settings_dict, path=None):
    try:
        with open(path or config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError as e:
        logger.error("Settings could not be saved: %s", e)
        return {}
