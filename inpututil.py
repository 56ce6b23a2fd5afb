from pathlib import Path


def get_input(prompt, target_type=str, allowed=None):
    """
    input() that keeps asking until the answer converts to target_type
    and, when allowed is given, is one of the allowed values
    """
    while True:
        answer = input(prompt).strip()
        try:
            value = target_type(answer)
        except ValueError:
            print(f"{answer!r} is not a valid {target_type.__name__}")
            continue
        if allowed is None or value in allowed:
            return value
        print(f"Choose from {allowed}")


def choose_option(options: dict, text1="Choose an option:"):
    """
    prints each option as [key] description and returns the key the user picked.
    e.g choose_option({"f": "Find secret", "q": "Quit"})
    """
    print(text1)
    for key, description in options.items():
        print(f"[{key}] {description}")
    return get_input("> ", str, list(options))


def get_existing_path(prompt):
    # keeps asking until the path points at a readable file, blank input cancels
    while True:
        path = get_input(prompt)
        if path == "":
            return None
        if Path(path).is_file():
            return path
        print(f"No such file: {path}")


class AtLeast:
    """open ended integer range for settings like worker counts, AtLeast(1) accepts 1, 2, 3..."""
    def __init__(self, minimum):
        self.minimum = minimum

    def __contains__(self, value):
        return value >= self.minimum

    def __repr__(self):
        return f"at least {self.minimum}"
