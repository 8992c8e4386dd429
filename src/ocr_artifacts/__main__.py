# src/ocr_artifacts/__main__.py
from __future__ import annotations

import argparse

from ocr_artifacts.cli.argparse_model import add_model_to_parser
from ocr_artifacts.cli.commands import (
    ResolveCommand,
    ValidateCommand,
    VersionsCommand,
    handle_resolve,
    handle_validate,
    handle_versions,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="ocr-artifacts")
    sub = parser.add_subparsers(dest="command", required=True)

    versions_p = sub.add_parser("versions", help="List known model versions.")
    add_model_to_parser(versions_p, VersionsCommand)

    resolve_p = sub.add_parser("resolve", help="Show the resolved artifact paths for a version.")
    add_model_to_parser(resolve_p, ResolveCommand)

    validate_p = sub.add_parser("validate", help="Check that every artifact of a version can be loaded.")
    add_model_to_parser(validate_p, ValidateCommand)

    ns = parser.parse_args(argv)
    data = vars(ns)
    command = data.pop("command")

    if command == "versions":
        return handle_versions(VersionsCommand.model_validate(data))
    if command == "resolve":
        return handle_resolve(ResolveCommand.model_validate(data))
    if command == "validate":
        return handle_validate(ValidateCommand.model_validate(data))

    raise RuntimeError(f"Unknown command: {command}")


if __name__ == "__main__":
    raise SystemExit(main())
