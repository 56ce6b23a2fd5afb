import json
from inpututil import get_input, AtLeast

SETTINGS_FILE = "settings.json"

DEFAULT_SETTINGS = {
    "tieBreak": "first",
    "maxCombinations": 0,  # 0 = no limit
    "workers": 1,
    "showTally": "no",
    "printOrCopySecret": "print",
}

# allowed values and types for each setting
ALLOWED_VALUES = {
    "tieBreak": (str, ("first", "smallest")),
    "maxCombinations": (int, AtLeast(0)),
    "workers": (int, AtLeast(1)),
    "showTally": (str, ("yes", "no")),
    "printOrCopySecret": (str, ("print", "copy", "ask")),
}


def get_settings(settings_file=SETTINGS_FILE):
    """
    reads the settings file, filling in defaults for anything missing.
    a missing file just means every setting has its default value
    """
    try:
        with open(settings_file, "r") as f:
            stored = json.load(f)
    except FileNotFoundError:
        stored = {}

    settings = dict(DEFAULT_SETTINGS)
    settings.update(stored)
    # unknown keys are kept as is, known ones have to be valid
    for key in ALLOWED_VALUES:
        validate_setting(key, settings[key])
    return settings


def validate_setting(key, value):
    if key not in ALLOWED_VALUES:
        raise ValueError(f"Unknown setting {key!r}")
    value_type, allowed_value_range = ALLOWED_VALUES[key]
    # bool is a subclass of int, json true/false is never a valid count
    if not isinstance(value, value_type) or isinstance(value, bool):
        raise ValueError(f"Setting {key!r} must be of type {value_type.__name__}, got {value!r}")
    if value not in allowed_value_range:
        raise ValueError(f"Setting {key!r} must be within {allowed_value_range}, got {value!r}")
    return value


def change_settings(settings_file=SETTINGS_FILE):
    settings = get_settings(settings_file)

    keys = list(settings.keys())

    # print settings
    print("Settings:")
    for idx, key in enumerate(keys):
        print(f"[{idx}] {key}: {settings[key]}")

    choice = get_input("Select a setting to change (number)\n> ", int, range(len(settings)))

    key = keys[choice]
    if key not in ALLOWED_VALUES:
        print(f"'{key}' is not a known setting and cannot be changed here.")
        return
    value_type, allowed_value_range = ALLOWED_VALUES[key]

    print(f"Current value: {settings[key]}")
    print(f"Allowed values: {allowed_value_range}")
    new_value = get_input(f"Enter new value for '{key}'\n> ", value_type, allowed_value_range)
    settings[key] = new_value


    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=4)
    print("Settings updated.")



def reset_settings(settings_file=SETTINGS_FILE):
    with open(settings_file, "w") as f:
        json.dump(DEFAULT_SETTINGS, f, indent=4)
    print("Settings reset to default values.")
