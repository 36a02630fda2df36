"""YAML helpers"""

import os
import typing as t

import yaml

from fsfixture.utils.data_utils import NotSpecified


def yaml_safe_load_file(fname: str | os.PathLike, default: t.Any = NotSpecified) -> t.Any:
    """Load YAML content from a file safely.

    A missing file returns ``default`` when one is given. An empty file loads as
    ``default`` (or None). Anything else that goes wrong is raised as RuntimeError.
    """
    if default is not NotSpecified and not os.path.exists(fname):
        return default
    try:
        with open(fname, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except Exception as e:
        raise RuntimeError(f"Failed to load YAML file '{fname}': {e}") from e
    if data is None and default is not NotSpecified:
        return default
    return data
