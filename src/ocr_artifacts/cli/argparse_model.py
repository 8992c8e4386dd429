from __future__ import annotations

import argparse
from enum import Enum
from typing import Any, Literal, Type, Union, get_args, get_origin

from pydantic import BaseModel


def _unwrap_optional(tp: Any) -> Any:
    if get_origin(tp) is Union:
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def add_model_to_parser(parser: argparse.ArgumentParser, model: Type[BaseModel]) -> None:
    """
    Add one ``--flag`` per field of a Pydantic v2 model.

    Values stay strings (Enum fields get their values as choices); the model
    validates them when built with model.model_validate(vars(args)).
    """
    for name, field in model.model_fields.items():
        ann = _unwrap_optional(field.annotation if field.annotation is not None else str)
        flag = f"--{name.replace('_', '-')}"
        required = field.is_required()
        default = None if required else field.default
        help_text = field.description or ""

        if ann is bool:
            parser.add_argument(
                flag,
                dest=name,
                action=argparse.BooleanOptionalAction,
                default=bool(default),
                help=help_text,
            )
            continue

        if get_origin(ann) is Literal:
            parser.add_argument(
                flag,
                dest=name,
                choices=list(get_args(ann)),
                default=default,
                required=required,
                help=help_text,
            )
            continue

        if isinstance(ann, type) and issubclass(ann, Enum):
            parser.add_argument(
                flag,
                dest=name,
                choices=[m.value for m in ann],
                default=default.value if isinstance(default, Enum) else default,
                required=required,
                help=help_text,
            )
            continue

        parser.add_argument(
            flag,
            dest=name,
            type=ann if ann in (int, float) else str,
            default=default,
            required=required,
            help=help_text,
        )
