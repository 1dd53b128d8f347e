"""Small shared helpers for converters, normalizers and stream engines."""

from .fields import get_field, get_list, get_path
from .ids import new_id
from .json_args import coerce_arguments, dump_arguments, parse_arguments

__all__ = [
    "get_field",
    "get_path",
    "get_list",
    "new_id",
    "parse_arguments",
    "coerce_arguments",
    "dump_arguments",
]
