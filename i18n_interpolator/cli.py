import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from i18n_interpolator import __version__
from i18n_interpolator.catalog import (
    get_all_keys,
    get_missing_translations,
    load_catalog,
    load_document,
)
from i18n_interpolator.config import InterpolatorConfig
from i18n_interpolator.detector import detect_os_language
from i18n_interpolator.engine import DEFAULT_LANGUAGE, Interpolator, parse_relaxed
from i18n_interpolator.ui import (
    console,
    data_table,
    error,
    info,
    section,
    status_box,
    success,
    warning,
)

logger = logging.getLogger(__name__)


class InterpolatorCLI:
    def __init__(
        self,
        verbose: bool = False,
        catalog_path: str | None = None,
        language: str | None = None,
    ):
        self.verbose = verbose
        self.catalog_path = catalog_path
        self.language = language
        self.config = InterpolatorConfig()

    def _load_catalog(self) -> dict[str, dict[str, str]]:
        """Load the catalog from --catalog or the configured path."""
        path = self.catalog_path or self.config.get_catalog_path()
        if path is None:
            raise ValueError(
                "No catalog configured. Pass --catalog PATH or run "
                "'i18n-interpolate config --catalog PATH'"
            )
        return load_catalog(path)

    def _resolve_language(self, catalog: dict[str, dict[str, str]]) -> str:
        if self.language == "auto":
            return detect_os_language(catalog.keys()) or DEFAULT_LANGUAGE
        if self.language:
            if self.language not in catalog:
                warning(f"Language '{self.language}' not in catalog, using '{DEFAULT_LANGUAGE}'")
            return self.language
        return self.config.get_language(catalog.keys())

    def _build_interpolator(self) -> Interpolator:
        catalog = self._load_catalog()
        language = self._resolve_language(catalog)
        logger.debug(f"Interpolating with language {language!r}")
        return Interpolator(
            catalog,
            language,
            max_depth=self.config.get_max_depth(),
            debug=self.config.is_debug(),
        )

    def _write_output(self, result: Any, output: str | None) -> None:
        if isinstance(result, str):
            text = result
        else:
            text = json.dumps(result, ensure_ascii=False, indent=2)

        if output:
            Path(output).write_text(text + "\n", encoding="utf-8")
            success(f"Wrote {output}")
        else:
            console.out(text, highlight=False)

    def render(self, args: argparse.Namespace) -> int:
        """Interpolate a document file, stdin, or a literal string."""
        interpolator = self._build_interpolator()

        if args.text is not None:
            document: Any = args.text
        elif args.file in (None, "-"):
            document = parse_relaxed(sys.stdin.read())
        else:
            document = load_document(args.file)

        result = interpolator.interpolate(document)
        self._write_output(result, args.output)
        return 0

    def translate(self, args: argparse.Namespace) -> int:
        """Translate a single key, resolving markers inside --vars first."""
        interpolator = self._build_interpolator()

        variables = None
        if args.vars:
            variables = interpolator.interpolate(parse_relaxed(args.vars))

        console.out(interpolator.translate(args.key, variables), highlight=False)
        return 0

    def languages(self) -> int:
        """List catalog languages with key counts."""
        catalog = self._load_catalog()
        if not catalog:
            warning("Catalog has no languages")
            return 1

        active = self._resolve_language(catalog)
        rows = []
        for language in sorted(catalog):
            marker = "✓" if language == active else ""
            rows.append([language, len(get_all_keys(catalog, language)), marker])

        section("CATALOG LANGUAGES")
        data_table(
            columns=[
                {"name": "Language", "style": "cyan"},
                {"name": "Keys", "justify": "right"},
                {"name": "Active", "justify": "center", "style": "green"},
            ],
            rows=rows,
        )
        return 0

    def missing(self, args: argparse.Namespace) -> int:
        """Report keys present in the reference language but missing from a language."""
        catalog = self._load_catalog()

        for language in (args.language_code, args.reference):
            if language not in catalog:
                error(f"Language '{language}' not found in catalog")
                return 1

        missing = sorted(get_missing_translations(catalog, args.language_code, args.reference))
        if not missing:
            success(f"'{args.language_code}' has every key from '{args.reference}'")
            return 0

        section(f"MISSING IN {args.language_code.upper()}")
        for key in missing:
            info(f"  • {key}")
        console.print()
        warning(f"{len(missing)} key(s) missing from '{args.language_code}'")
        return 1

    def config_command(self, args: argparse.Namespace) -> int:
        """Show or persist preferences."""
        if args.catalog_path:
            catalog = load_catalog(args.catalog_path)
            self.config.set_catalog_path(args.catalog_path)
            success(f"Catalog set to {args.catalog_path} ({len(catalog)} languages)")

        if args.set_language:
            if args.set_language == "auto":
                self.config.clear_language()
                success("Language preference cleared, using auto-detection")
            else:
                catalog_path = self.config.get_catalog_path()
                if catalog_path is not None:
                    catalog = load_catalog(catalog_path)
                    if args.set_language not in catalog:
                        error(f"Language '{args.set_language}' not found in catalog")
                        info(f"Available: {', '.join(sorted(catalog))}")
                        return 1
                self.config.set_language(args.set_language)
                success(f"Language set to '{args.set_language}'")

        if args.info or not (args.catalog_path or args.set_language):
            return self._show_config()
        return 0

    def _show_config(self) -> int:
        catalog_path = self.config.get_catalog_path()
        available: list[str] = []
        if catalog_path is not None:
            try:
                available = sorted(load_catalog(catalog_path))
            except ValueError as e:
                warning(f"Could not load catalog: {e}")

        config_info = self.config.get_config_info(available)
        status_box(
            "I18N INTERPOLATOR CONFIG",
            {
                "Language": f"{config_info['language']} ({config_info['source']})",
                "Saved preference": config_info["saved_preference"] or "-",
                "Detected": config_info["detected_language"] or "-",
                "Catalog": config_info["catalog"] or "-",
                "Languages": ", ".join(available) or "-",
                "Max depth": str(config_info["max_depth"]),
                "Debug": "on" if config_info["debug"] else "off",
            },
        )
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i18n-interpolate",
        description='Resolve ${i18n("KEY", vars)} markers in JSON-like documents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global flags
    parser.add_argument("--version", "-V", action="version", version=f"i18n-interpolate {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    parser.add_argument("--catalog", "-c", help="Catalog directory or file")
    parser.add_argument("--language", "-l", help="Language to translate into ('auto' to detect)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Interpolate a document")
    render_parser.add_argument("file", nargs="?", help="YAML/JSON/JSON5 document, '-' for stdin")
    render_parser.add_argument("--text", "-t", help="Interpolate this string instead of a file")
    render_parser.add_argument("--output", "-o", help="Write the result to a file")

    translate_parser = subparsers.add_parser("translate", help="Translate a single key")
    translate_parser.add_argument("key")
    translate_parser.add_argument("--vars", help="Variables as JSON5")

    subparsers.add_parser("languages", help="List catalog languages")

    missing_parser = subparsers.add_parser("missing", help="Show untranslated keys")
    missing_parser.add_argument("language_code")
    missing_parser.add_argument("--reference", default=DEFAULT_LANGUAGE)

    config_parser = subparsers.add_parser("config", help="Show or change preferences")
    config_parser.add_argument("--language", dest="set_language", help="Language or 'auto'")
    config_parser.add_argument("--catalog", dest="catalog_path", help="Catalog directory or file")
    config_parser.add_argument("--info", action="store_true", help="Show current configuration")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    cli = InterpolatorCLI(verbose=args.verbose, catalog_path=args.catalog, language=args.language)

    try:
        if args.command == "render":
            return cli.render(args)
        elif args.command == "translate":
            return cli.translate(args)
        elif args.command == "languages":
            return cli.languages()
        elif args.command == "missing":
            return cli.missing(args)
        elif args.command == "config":
            return cli.config_command(args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        console.print()
        error("Operation cancelled")
        return 130
    except (ValueError, OSError, RuntimeError) as e:
        error(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
