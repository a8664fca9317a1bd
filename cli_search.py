#!/usr/bin/env python3

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from colored_logger import setup_colored_logging, get_colored_logger
from docsearch import (
    DocumentLoader,
    SearchEngine,
    SqliteStorage,
    TagStore,
    format_file_size,
    highlight_keywords,
    highlight_spans,
    load_config,
)

logger = get_colored_logger(__name__)

ANSI_HIGHLIGHT = "\033[1;33m"
ANSI_RESET = "\033[0m"


def ansi_highlight(text: str, query: str) -> str:
    """Emphasise query terms in text with ANSI escape codes."""
    parts = []
    last = 0
    for start, end in highlight_spans(text, query):
        parts.append(text[last:start])
        parts.append(f"{ANSI_HIGHLIGHT}{text[start:end]}{ANSI_RESET}")
        last = end
    parts.append(text[last:])
    return "".join(parts)


class SearchCLI:
    """
    Command-line interface for docsearch.

    Provides commands for:
    - Searching a directory of text files, optionally by tag
    - Highlighting query terms in a piece of text
    - Managing tag assignments
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the CLI.

        Args:
            config: Pre-loaded configuration. If None, it is loaded from
                --config (or the default locations) when run() is called.
        """
        self.config = config
        self.tag_store: Optional[TagStore] = None
        self.search_engine: Optional[SearchEngine] = None
        self.loader: Optional[DocumentLoader] = None

    def run(self, args: List[str] = None) -> int:
        """
        Run the CLI with the given arguments.

        Args:
            args: Command line arguments. If None, uses sys.argv.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        try:
            parser = self._create_parser()
            parsed_args = parser.parse_args(args)

            if parsed_args.verbose:
                setup_colored_logging(level="DEBUG")
            else:
                setup_colored_logging()

            if not hasattr(parsed_args, "func"):
                parser.print_help()
                return 1

            self._setup(parsed_args)
            return parsed_args.func(parsed_args)

        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 1
        except Exception as e:
            logger.error("Unexpected error: %s", e)
            return 1

    def _setup(self, args) -> None:
        """Build the components from configuration and global options."""
        if self.config is None:
            self.config = load_config(args.config)

        db_path = args.db or self.config["storage"]["path"]
        self.tag_store = TagStore.from_config(self.config, SqliteStorage(db_path))
        self.search_engine = SearchEngine.from_config(self.config, self.tag_store)
        self.loader = DocumentLoader.from_config(self.config)

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser with all subcommands."""
        parser = argparse.ArgumentParser(
            prog="docsearch",
            description="Search and tag plain-text documents",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  %(prog)s search ./docs "invoice payment"        # Search documents in ./docs
  %(prog)s search ./docs invoice -t finance       # Only documents tagged finance
  %(prog)s highlight "apple" "An Apple a day"     # Print <mark> markup
  %(prog)s tag apply notes/q1.txt finance         # Tag a document
  %(prog)s tag show notes/q1.txt                  # List a document's tags
            """,
        )

        parser.add_argument(
            "-v", "--verbose", action="store_true", help="Enable verbose logging"
        )
        parser.add_argument("--config", help="Path to a YAML configuration file")
        parser.add_argument("--db", help="Path to the tag database")

        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        self._add_search_parser(subparsers)
        self._add_highlight_parser(subparsers)
        self._add_tag_parser(subparsers)

        return parser

    def _add_search_parser(self, subparsers):
        """Add search subcommand parser."""
        search_parser = subparsers.add_parser(
            "search", help="Search text files in a directory"
        )
        search_parser.add_argument("directory", help="Directory containing documents")
        search_parser.add_argument("query", help="Search text")
        search_parser.add_argument(
            "-t",
            "--tag",
            action="append",
            help="Only documents with this tag (can be used multiple times)",
        )
        search_parser.add_argument(
            "-l",
            "--limit",
            type=int,
            default=20,
            help="Maximum results to show (default: 20)",
        )
        search_parser.add_argument(
            "--format",
            choices=["table", "list", "json"],
            default="table",
            help="Output format (default: table)",
        )
        search_parser.add_argument(
            "--no-color", action="store_true", help="Disable ANSI highlighting"
        )
        search_parser.set_defaults(func=self._cmd_search)

    def _add_highlight_parser(self, subparsers):
        """Add highlight subcommand parser."""
        highlight_parser = subparsers.add_parser(
            "highlight", help="Wrap query terms in text with <mark> tags"
        )
        highlight_parser.add_argument("query", help="Search text")
        highlight_parser.add_argument("text", help="Text to highlight")
        highlight_parser.set_defaults(func=self._cmd_highlight)

    def _add_tag_parser(self, subparsers):
        """Add tag management subcommand parser."""
        tag_parser = subparsers.add_parser("tag", help="Manage document tags")
        tag_subparsers = tag_parser.add_subparsers(
            dest="tag_action", help="Tag actions"
        )

        apply_parser = tag_subparsers.add_parser("apply", help="Tag a document")
        apply_parser.add_argument("doc_id", help="Document id (relative path)")
        apply_parser.add_argument("name", help="Tag name")
        apply_parser.add_argument("-c", "--color", help="Color for a new tag")
        apply_parser.set_defaults(func=self._cmd_tag_apply)

        remove_parser = tag_subparsers.add_parser(
            "remove", help="Remove a tag from a document"
        )
        remove_parser.add_argument("doc_id", help="Document id (relative path)")
        remove_parser.add_argument("name", help="Tag name")
        remove_parser.set_defaults(func=self._cmd_tag_remove)

        show_parser = tag_subparsers.add_parser("show", help="Show a document's tags")
        show_parser.add_argument("doc_id", help="Document id (relative path)")
        show_parser.set_defaults(func=self._cmd_tag_show)

        list_parser = tag_subparsers.add_parser("list", help="List all tags")
        list_parser.set_defaults(func=self._cmd_tag_list)

    # Command implementations
    def _cmd_search(self, args) -> int:
        """Handle search command."""
        documents = self.loader.load_directory(args.directory)
        if not documents:
            logger.error("No documents found in %s", args.directory)
            return 1

        results = self.search_engine.search(documents, args.query, args.tag)
        if args.limit is not None and args.limit >= 0:
            results = results[: args.limit]

        if not results:
            print("No results found.")
            return 0

        by_id = {doc.id: doc for doc in documents}
        color = not args.no_color and sys.stdout.isatty()
        self._display_search_results(results, by_id, args.query, args.format, color)
        return 0

    def _cmd_highlight(self, args) -> int:
        """Handle highlight command."""
        print(
            highlight_keywords(
                args.text, args.query, style=self.config["highlight"]["style"]
            )
        )
        return 0

    def _cmd_tag_apply(self, args) -> int:
        """Handle tag apply command."""
        name = args.name.strip()
        if not name:
            logger.error("Tag name cannot be empty")
            return 1

        # Reuse an existing tag of that name so filters keep matching one id
        tag = self.tag_store.find_tag(name) or self.tag_store.create_tag(
            name, args.color
        )
        if self.tag_store.tag(args.doc_id, tag):
            print(f"✅ Tagged {args.doc_id} with '{tag.name}'")
        else:
            print(f"{args.doc_id} already has tag '{tag.name}'")
        return 0

    def _cmd_tag_remove(self, args) -> int:
        """Handle tag remove command."""
        matching = [
            tag for tag in self.tag_store.tags_for(args.doc_id) if tag.name == args.name
        ]
        if not matching:
            print(f"❌ {args.doc_id} has no tag '{args.name}'")
            return 1

        for tag in matching:
            self.tag_store.untag(args.doc_id, tag.id)
        print(f"✅ Removed '{args.name}' from {args.doc_id}")
        return 0

    def _cmd_tag_show(self, args) -> int:
        """Handle tag show command."""
        tags = self.tag_store.tags_for(args.doc_id)

        if not tags:
            print(f"Document {args.doc_id} has no tags.")
            return 0

        print(f"Tags for document {args.doc_id}:")
        for tag in tags:
            print(f"  • {tag.name} ({tag.color})")

        return 0

    def _cmd_tag_list(self, args) -> int:
        """Handle tag list command."""
        tags = self.tag_store.all_tags()

        if not tags:
            print("No tags found.")
            return 0

        print(f"\nFound {len(tags)} tags:")
        print(f"{'Id':<12} {'Name':<20} {'Color':<10}")
        print("-" * 44)

        for tag in tags:
            print(f"{tag.id:<12} {tag.name:<20} {tag.color:<10}")

        return 0

    def _display_search_results(
        self, results, documents, query: str, format_type: str, color: bool
    ) -> None:
        """Display search results in the specified format."""
        if format_type == "json":
            print(json.dumps([result.to_dict() for result in results], indent=2))

        elif format_type == "list":
            for i, result in enumerate(results, 1):
                doc = documents[result.doc_id]
                print(f"{i}. {result.doc_name}")
                print(
                    f"   Score: {result.relevance_score:g}"
                    f" | Matches: {result.match_count}"
                    f" | Size: {format_file_size(doc.size)}"
                )
                for snippet in result.snippets:
                    shown = ansi_highlight(snippet, query) if color else snippet
                    print(f"   {shown}")
                print(f"   Id: {result.doc_id}")
                print()

        else:  # table format
            print(f"\nFound {len(results)} result(s):")
            print(f"{'#':<3} {'Document':<40} {'Matches':<8} {'Score':<8}")
            print("-" * 62)

            for i, result in enumerate(results, 1):
                name = (
                    result.doc_name[:37] + "..."
                    if len(result.doc_name) > 40
                    else result.doc_name
                )
                print(
                    f"{i:<3} {name:<40} {result.match_count:<8} "
                    f"{result.relevance_score:<8g}"
                )


def main():
    """Main entry point for the docsearch CLI."""
    cli = SearchCLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
