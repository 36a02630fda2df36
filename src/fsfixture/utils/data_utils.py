"""Helpers for nested config data.

Used by the configuration layer to look up dotted paths and to merge
override files into the shipped defaults.
"""

import typing as t
from collections.abc import Iterable
from copy import deepcopy

from deepmerge import Merger


class NotSpecified:  # pylint: disable=too-few-public-methods
    """Sentinel class to distinguish between None and no default value provided."""


def get_multi(data, path: str | list[str], default=NotSpecified):
    """Get a value from nested dictionary using a dot-separated path.

    Args:
        data: Dictionary or nested dictionary to retrieve value from.
        path: Dot-separated string path (e.g., 'copy_from.follow_links') or list of keys.
        default: Default value to return if path not found. If NotSpecified, raises exception.

    Returns:
        The value at the specified path.

    Raises:
        KeyError: If path not found and default is NotSpecified.
        TypeError: If intermediate value is not subscriptable.
    """
    if isinstance(path, str):
        path = path.split(".")
    try:
        return get_multi(data[path[0]], path[1:], default) if path else data
    except (KeyError, TypeError) as e:
        if default is NotSpecified:
            raise type(e)(f"{path=} {e!r}") from e
        return default


def listify(data) -> list:
    """Ensure data is a list; strings and bytes count as a single item."""
    if isinstance(data, list):
        return data
    if isinstance(data, Iterable) and not isinstance(data, (str, bytes)):
        return list(data)
    return [data]


T = t.TypeVar("T")


def merge_struct(data1: T, data2: T) -> T:
    """
    Deep-merge two JSON-like structures.

    Rules:
      - dict + dict   => recursive merge, keys of data2 win
      - anything else => take the 2nd value (data2), None included

    Returns a NEW structure; does not mutate inputs.
    """
    base = deepcopy(data1)  # deepmerge mutates the first argument
    merger = Merger(
        [(dict, ["merge"])],
        ["override"],
        # type conflicts (None vs str, dict vs list, ...)
        ["override"],
    )
    return merger.merge(base, deepcopy(data2))
