import argparse
import logging
from typing import Optional

from psd_rename import actions
from psd_rename.editor import Editor
from psd_rename.tree import Document
from psd_rename.version import __version__

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="psd-rename", description="Rename and classify PSD layers."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--encoding", default="macroman", help="Text encoding of pascal strings."
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser("show", help="Show the layer tree")
    show_parser.add_argument("input_file", help="Input PSD file")

    rename_parser = subparsers.add_parser(
        "rename", help="Rename selected layers and save the result"
    )
    rename_parser.add_argument("input_file", help="Input PSD file")
    rename_parser.add_argument("output_file", help="Output PSD file")
    rename_parser.add_argument(
        "--select",
        type=int,
        nargs="+",
        default=[],
        metavar="ID",
        help="Toggle selection of the given layers.",
    )
    rename_parser.add_argument(
        "--select-children",
        type=int,
        nargs="+",
        default=[],
        metavar="ID",
        help="Toggle selection of the direct children of the given layers.",
    )
    rename_parser.add_argument(
        "--select-descendants",
        type=int,
        nargs="+",
        default=[],
        metavar="ID",
        help="Toggle selection of all the descendants of the given layers.",
    )
    kind_group = rename_parser.add_mutually_exclusive_group()
    kind_group.add_argument(
        "--required",
        dest="kind",
        action="store_const",
        const=actions.GainRequired,
        help="Mark selected layers as required.",
    )
    kind_group.add_argument(
        "--radio",
        dest="kind",
        action="store_const",
        const=actions.GainRadio,
        help="Mark selected layers as radio.",
    )
    kind_group.add_argument(
        "--optional",
        dest="kind",
        action="store_const",
        const=actions.RemoveSpecifier,
        help="Remove the kind marker of selected layers.",
    )
    rename_parser.add_argument("--add-prefix", metavar="TEXT")
    rename_parser.add_argument("--remove-prefix", metavar="TEXT")
    rename_parser.add_argument("--add-postfix", metavar="TEXT")
    rename_parser.add_argument("--remove-postfix", metavar="TEXT")
    return parser


def format_tree(document: Document) -> list[str]:
    """Format the layers of `document` one per line, in display order."""
    lines = []
    for layer in document.descendants():
        indent = "  " * (len(layer.path) - 1)
        lines.append(
            "%s%d %s %s" % (indent, layer.id, layer.kind.value.lower(), layer.name)
        )
    return lines


def _rename_actions(args: argparse.Namespace) -> list:
    edits = []
    if args.kind is not None:
        edits.append(args.kind())
    if args.add_prefix is not None:
        edits.append(actions.AppendPrefix(args.add_prefix))
    if args.remove_prefix is not None:
        edits.append(actions.RemovePrefix(args.remove_prefix))
    if args.add_postfix is not None:
        edits.append(actions.AppendPostfix(args.add_postfix))
    if args.remove_postfix is not None:
        edits.append(actions.RemovePostfix(args.remove_postfix))
    return edits


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("psd_rename")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    editor = Editor.open(args.input_file, encoding=args.encoding)

    if args.command == "show":
        document = editor.state.document
        print("%s (%dx%d)" % (args.input_file, document.width, document.height))
        for line in format_tree(document):
            print(line)

    elif args.command == "rename":
        selections = (
            (args.select, actions.ToggleSelf),
            (args.select_children, actions.ToggleChildren),
            (args.select_descendants, actions.ToggleDescendants),
        )
        for layer_ids, action_type in selections:
            for layer_id in layer_ids:
                path = editor.state.document.find_path(layer_id)
                if path is None:
                    parser.error("no layer with id %d" % layer_id)
                editor.dispatch(action_type(path))

        for action in _rename_actions(args):
            editor.dispatch(action)

        try:
            editor.save(args.output_file, encoding=args.encoding)
        except (OSError, ValueError) as e:
            logger.error(str(e))
            return 1

    return None


if __name__ == "__main__":
    main()
