"""
CLI for compiling UI tree documents locally.

    uitree compile app.json --platform cross-platform --out build/
    uitree compile app.json --check
    uitree platforms
"""

import argparse
import logging
import sys

from src.generator.registries.platforms import PLATFORMS
from src.service.compile_service import CompileService, DocumentLoadError

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def cmd_compile(args) -> int:
    """Compile a document and write its artifacts."""
    service = CompileService(
        output_dir=args.out,
        default_platform=None,
        max_workers=args.workers,
    )
    try:
        document = service.load_document(args.input)
    except DocumentLoadError as e:
        logger.error(str(e))
        return 1

    response = service.compile(document, args.platform)
    if response.status != "success":
        for error in response.errors:
            print(f"{error.kind}: {error.path}: {error.message}", file=sys.stderr)
        print(f"❌ Compilation failed with {len(response.errors)} error(s)", file=sys.stderr)
        return 1

    if args.check:
        print(f"✅ {args.input} is valid for {response.platform.value}")
        return 0

    root = service.write_artifacts(response.artifacts)
    print(f"✅ Compiled {args.input} for {response.platform.value}")
    for path in response.artifacts:
        print(f"   {root / path}")
    return 0


def cmd_platforms(args) -> int:
    """List supported target platforms."""
    for platform, profile in PLATFORMS.items():
        print(f"{platform.value:<16} components/*{profile.source_extension}, {profile.style_module_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Compile UI tree documents to component source")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Compile command
    compile_parser = subparsers.add_parser("compile", help="Compile a document")
    compile_parser.add_argument("input", help="Path or http(s) URL of the app document")
    compile_parser.add_argument(
        "--platform",
        choices=[p.value for p in PLATFORMS],
        help="Target platform (default: the document's, then UITREE_DEFAULT_PLATFORM)",
    )
    compile_parser.add_argument("--out", help="Output directory (default: UITREE_OUTPUT_DIR)")
    compile_parser.add_argument(
        "--workers", type=int, default=None, help="Worker threads for per-component work"
    )
    compile_parser.add_argument(
        "--check", action="store_true", help="Validate and compile without writing artifacts"
    )

    # Platforms command
    subparsers.add_parser("platforms", help="List target platforms")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "compile": cmd_compile,
        "platforms": cmd_platforms,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
