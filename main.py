import argparse
import logging
import sys
import pyperclip
from inpututil import choose_option, get_existing_path
from settings_handler import ALLOWED_VALUES, get_settings, change_settings, reset_settings, validate_setting
from secret_finder import ConsistencyVoter, SecretFinderError, load_share_set, recover_secret

logger = logging.getLogger("secret_finder")


"""
finds the secret of a (possibly corrupted) set of shamir shares stored in json files
    python main.py case1.json case2.json
or with no arguments for the interactive menu
"""


def build_voter(settings) -> ConsistencyVoter:
    return ConsistencyVoter(tie_break=settings["tieBreak"],
                            max_combinations=settings["maxCombinations"] or None,
                            workers=settings["workers"])


def print_result(result, show_tally=False):
    print(f"Secret: {result.secret}")

    if result.faulty_shares:
        print("Faulty Shares:")
        for share in result.faulty_shares:
            print(f"  {share}")

    if show_tally:
        print(f"Vote tally ({result.combinations_tried} combinations, {result.inconsistent_combinations} inconsistent):")
        for secret, count in result.tally.counts().items():
            print(f"  {secret}: {count}")


def copy_to_clipboard(secret):
    try:
        pyperclip.copy(str(secret))
    except pyperclip.PyperclipException as e:
        print(f"Could not copy to clipboard ({e}), printing instead")
        print(f"Secret: {secret}")
        return
    print("Secret copied to clipboard.")


def solve_file(path, settings):
    print(f"\n--- Processing: {path} ---")
    share_set = load_share_set(path)
    logger.info("loaded %d shares with k = %d from %s", len(share_set), share_set.threshold, path)

    result = recover_secret(share_set, build_voter(settings))
    print_result(result, settings["showTally"] == "yes")
    return result


def run_files(paths, settings) -> int:
    """processes each file independently, returns the exit status (1 if any file failed)"""
    failed = 0
    results = []
    for path in paths:
        try:
            results.append(solve_file(path, settings))
        except (SecretFinderError, OSError) as e:
            print(f"Failed to process {path}. Error: {e}")
            failed += 1

    if settings["printOrCopySecret"] == "copy" and len(results) == 1:
        copy_to_clipboard(results[0].secret)

    return 1 if failed else 0


def find_secret_interactive(settings):
    path = get_existing_path("Enter the path of the json file (blank to cancel)\n> ")
    if path is None:
        return
    try:
        result = solve_file(path, settings)
    except (SecretFinderError, OSError) as e:
        print(f"Failed to process {path}. Error: {e}")
        return

    mode = settings["printOrCopySecret"]
    if mode == "ask":
        mode = "copy" if choose_option({
            "c": "Copy secret to clipboard",
            "n": "Done",
        }) == "c" else "print"
    if mode == "copy":
        copy_to_clipboard(result.secret)


def main_menu(settings_file, args=None):
    while True:
        # reloaded every time so changes made from the menu apply, command line flags still win
        settings = get_settings(settings_file)
        if args is not None:
            settings = apply_overrides(settings, args)
        match choose_option({
            "f": "Find secret from a file",
            "s": "Change settings",
            "r": "Reset settings",
            "q": "Quit"
        }):
            case "f":
                find_secret_interactive(settings)
            case "s":
                change_settings(settings_file)
            case "r":
                reset_settings(settings_file)
            case "q":
                print("Exiting...")
                return


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Reconstruct a threshold secret from shares and report the faulty ones")
    parser.add_argument("files", nargs="*", help="json files with the shares (interactive menu if none given)")
    parser.add_argument("--tie-break", choices=("first", "smallest"),
                        help="which secret wins when several have the same number of votes")
    parser.add_argument("--max-combinations", type=int,
                        help="refuse inputs with more combinations than this (0 = no limit)")
    parser.add_argument("--workers", type=int, help="number of processes used for reconstruction")
    parser.add_argument("--tally", action="store_true", help="print the vote count of every candidate secret")
    parser.add_argument("--copy", action="store_true", help="copy the secret to the clipboard (single file only)")
    parser.add_argument("--settings", default="settings.json", help="path of the settings file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every combination")
    return parser.parse_args(argv)


def apply_overrides(settings, args):
    # command line flags win over the settings file
    settings = dict(settings)
    if args.tie_break is not None:
        settings["tieBreak"] = args.tie_break
    if args.max_combinations is not None:
        settings["maxCombinations"] = args.max_combinations
    if args.workers is not None:
        settings["workers"] = args.workers
    if args.tally:
        settings["showTally"] = "yes"
    if args.copy:
        settings["printOrCopySecret"] = "copy"
    for key in ALLOWED_VALUES:
        validate_setting(key, settings[key])
    return settings


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    # shares and secrets are arbitrary precision, printing them must not hit the 4300 digit default
    sys.set_int_max_str_digits(0)

    try:
        settings = apply_overrides(get_settings(args.settings), args)
    except ValueError as e:
        print(f"Invalid settings: {e}")
        return 2

    if not args.files:
        main_menu(args.settings, args)
        return 0
    return run_files(args.files, settings)


if __name__ == "__main__":
    sys.exit(main())
