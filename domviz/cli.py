import argparse
import json
import logging
import sys

from domviz.commands import DeleteElementCommand, ElementNotFoundError
from domviz.config import Settings
from domviz.document import HTMLDocument
from domviz.locator import locate_element
from domviz.tree import build_tree, flatten_tree
from domviz.view import DOMTreeProvider, format_tree


def create_argument_parser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(
        prog="domviz",
        description="Show the element tree of an HTML file, "
                    "or find and delete the element under a cursor."
    )
    argparser.add_argument("--config", help="path to a JSON settings file")
    argparser.add_argument("-v", "--verbose", action="store_true")

    subparsers = argparser.add_subparsers(dest="command", required=True)

    tree_parser = subparsers.add_parser("tree", help="print the element tree")
    tree_parser.add_argument("file")
    tree_parser.add_argument("--json", action="store_true")

    for name, help_text in (
        ("locate", "print the range of the element under a position"),
        ("delete", "delete the element under a position"),
    ):
        position_parser = subparsers.add_parser(name, help=help_text)
        position_parser.add_argument("file")
        position_parser.add_argument("--line", type=int, required=True)
        position_parser.add_argument("--column", type=int, default=1)
        if name == "delete":
            position_parser.add_argument(
                "--yes", action="store_true",
                help="delete without asking for confirmation"
            )

    return argparser


def ask_confirmation(snippet: str) -> bool:
    print(snippet)
    answer = input("Delete this element? [y/N] ")
    return answer.strip().casefold() in ("y", "yes")


def cmd_tree(args: argparse.Namespace, settings: Settings) -> int:
    document = HTMLDocument.load(args.file)
    roots = build_tree(document.text)
    if args.json:
        print(json.dumps(flatten_tree(roots), indent=2))
    else:
        print(format_tree(roots))
    return 0


def cmd_locate(args: argparse.Namespace, settings: Settings) -> int:
    document = HTMLDocument.load(args.file)
    offset = document.offset_at(args.line, args.column)
    element_range = locate_element(document.text, offset)
    if element_range is None:
        print(ElementNotFoundError(document.line_at(offset)), file=sys.stderr)
        return 1

    print(element_range.start, element_range.end)
    print(document.snippet(element_range, settings.snippet_length))
    return 0


def cmd_delete(args: argparse.Namespace, settings: Settings) -> int:
    document = HTMLDocument.load(args.file)
    provider = DOMTreeProvider(source=lambda: document.text)
    provider.on_did_change(
        lambda: print(format_tree(build_tree(document.text)))
    )

    confirm = None
    if settings.confirm_deletions and not args.yes:
        confirm = ask_confirmation

    command = DeleteElementCommand(
        document=document,
        provider=provider,
        confirm=confirm,
        snippet_length=settings.snippet_length,
    )
    try:
        element_range = command.run(document.offset_at(args.line, args.column))
    except ElementNotFoundError as e:
        print(e, file=sys.stderr)
        return 1

    if element_range is None:
        print("Nothing deleted.")
    return 0


COMMANDS = {
    "tree": cmd_tree,
    "locate": cmd_locate,
    "delete": cmd_delete,
}


def main(argv: list[str] | None = None) -> int:
    args = create_argument_parser().parse_args(argv)

    try:
        settings = Settings.from_file(args.config) if args.config else Settings()
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args, settings)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
