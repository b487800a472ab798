"""Parse one block configuration file into a raw mapping."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import BlockConfigParseError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_block_config(path: Path) -> dict[str, typ.Any]:
    """Load the YAML block configuration stored at ``path``.

    Parameters
    ----------
    path : Path
        Location of a ``<identifier>.yml`` file.

    Returns
    -------
    dict[str, Any]
        The parsed top-level mapping; an empty file yields ``{}``. No keys
        are validated here.

    Raises
    ------
    BlockConfigParseError
        If the YAML is malformed, the file cannot be decoded, or the document
        is not a mapping.
    """
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle)
    except YAMLError as exc:
        raise BlockConfigParseError(path, str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise BlockConfigParseError(path, f"not valid UTF-8 ({exc.reason})") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"top-level structure must be a mapping, got {type(loaded).__name__}"
        raise BlockConfigParseError(path, msg)
    return dict(loaded)


__all__ = ["load_block_config"]
