"""CLI entry point: create knowledge-base notes from LinkedIn profiles."""

import argparse
import logging
import sys
from typing import Optional

from profile_notes.config import AppConfig, load_config, mask_key, save_config, validate_config
from profile_notes.errors import ProfileNotesError
from profile_notes.pipeline import create_profile_note, search_and_create
from profile_notes.profile.models import SearchResultEntry
from profile_notes.utils.logging_config import setup_logging

logger = logging.getLogger("profile_notes")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="profile-notes",
        description="Create markdown notes from LinkedIn profiles",
    )
    parser.add_argument(
        "--config", default="config.yaml",
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    profile = commands.add_parser("profile", help="Create a note from a profile URL or username")
    profile.add_argument("identifier", help="Profile URL or username")
    profile.add_argument("--folder", help="Vault subfolder for the new note")
    profile.add_argument("--overwrite", action="store_true", help="Replace an existing note")
    profile.add_argument("--insert-into", metavar="NOTE", help="Insert into this existing note instead")
    profile.add_argument("--line", type=int, help="0-based cursor line for --insert-into (default: end)")
    profile.add_argument("--column", type=int, default=0, help="0-based cursor column for --insert-into")

    search = commands.add_parser("search", help="Search profiles and create a note from one")
    search.add_argument("--first-name", default="")
    search.add_argument("--last-name", default="")
    search.add_argument("--keywords", default="")
    search.add_argument("--pick", type=int, help="Pick result N (1-based) without prompting")
    search.add_argument("--overwrite", action="store_true", help="Replace an existing note")

    settings = commands.add_parser("config", help="Show or update saved settings")
    settings.add_argument("--api-key")
    settings.add_argument("--api-host")
    settings.add_argument("--vault-dir")
    settings.add_argument("--folder")
    settings.add_argument("--locale")
    settings.add_argument("--tag")

    return parser.parse_args(argv)


def prompt_choice(results: list[SearchResultEntry]) -> Optional[SearchResultEntry]:
    """Print numbered results and ask which one to use."""
    for i, result in enumerate(results, 1):
        print(f"{i:>2}. {result.to_choice_string()}")
        if result.summary:
            print(f"    {result.summary[:200]}")

    while True:
        answer = input(f"Choose a profile [1-{len(results)}] (blank to cancel): ").strip()
        if not answer:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(results):
            return results[int(answer) - 1]
        print("Invalid choice.", file=sys.stderr)


def pick_choice(index: int):
    def choose(results: list[SearchResultEntry]) -> Optional[SearchResultEntry]:
        if not 1 <= index <= len(results):
            raise ValueError(f"--pick {index} is out of range (1-{len(results)})")
        return results[index - 1]
    return choose


def run_config_command(args: argparse.Namespace, config: AppConfig):
    updates = {
        ("api", "key"): args.api_key,
        ("api", "host"): args.api_host,
        ("notes", "vault_dir"): args.vault_dir,
        ("notes", "folder"): args.folder,
        ("notes", "locale"): args.locale,
        ("notes", "tag"): args.tag,
    }
    changed = False
    for (section, name), value in updates.items():
        if value is not None:
            setattr(getattr(config, section), name, value)
            changed = True

    if changed:
        path = save_config(config, args.config)
        logger.info("Settings saved to %s", path)

    print(f"API key:   {mask_key(config.api.resolved_key())}")
    print(f"API host:  {config.api.host}")
    print(f"Vault dir: {config.notes.vault_dir}")
    print(f"Folder:    {config.notes.folder or '(vault root)'}")
    print(f"Locale:    {config.notes.locale}")
    print(f"Tag:       {config.notes.tag}")


def run_command(args: argparse.Namespace, config: AppConfig):
    if args.command == "config":
        run_config_command(args, config)
        return

    if args.command == "profile":
        if args.folder is not None:
            config.notes.folder = args.folder
        document, path = create_profile_note(
            config,
            args.identifier,
            insert_into=args.insert_into,
            line=args.line,
            column=args.column,
            overwrite=args.overwrite,
        )
        print(f"Note successfully created for {document.title}: {path}")
        return

    if args.command == "search":
        choose = pick_choice(args.pick) if args.pick is not None else prompt_choice
        created = search_and_create(
            config,
            choose,
            first_name=args.first_name,
            last_name=args.last_name,
            keywords=args.keywords,
            overwrite=args.overwrite,
        )
        if created is None:
            print("No note created.")
            return
        document, path = created
        print(f"Note successfully created for {document.title}: {path}")


def main(argv: Optional[list[str]] = None):
    args = parse_args(argv)

    # Load config; the config command may create the file
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        if args.command != "config":
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        config = AppConfig()

    setup_logging(config.log_dir, verbose=args.verbose)

    for w in validate_config(config):
        logger.warning("Config: %s", w)

    try:
        run_command(args, config)
    except (ProfileNotesError, ValueError, OSError) as e:
        logger.error("%s failed: %s: %s", args.command, type(e).__name__, e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
