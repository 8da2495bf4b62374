from __future__ import annotations

"""
Configuration Validation Service.

Normalizes untrusted configuration (CLI overrides, saved JSON) into strictly
typed values before the engine runs. In lenient mode invalid values fall
back to defaults and are reported as warnings; in strict mode they raise.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from tree2fs.domain.config import get_default_config
from tree2fs.infra.fs import normalize_path

logger = logging.getLogger(__name__)

_TRUE_WORDS = ("true", "1", "yes", "y", "on")
_FALSE_WORDS = ("false", "0", "no", "n", "off")
_AUTO_WORDS = ("", "auto", "none", "null")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Missing keys are filled from the defaults; paths are made absolute.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for key in config:
        if key not in defaults:
            warnings.append(f"Unknown config key '{key}' ignored.")

    merged["tree_file"] = _as_str(merged.get("tree_file"), "", "tree_file", warnings, strict)
    merged["base_dir"] = _as_str(
        merged.get("base_dir"), defaults["base_dir"], "base_dir", warnings, strict
    )

    for field in ("dry_run", "verbose", "strict_roots"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["indent_width"] = _as_positive_int(
        merged.get("indent_width"), defaults["indent_width"], "indent_width", warnings, strict
    )
    merged["skip_root"] = _as_tristate(merged.get("skip_root"), "skip_root", warnings, strict)

    if merged["tree_file"]:
        merged["tree_file"] = normalize_path(merged["tree_file"], fallback="")
    merged["base_dir"] = normalize_path(merged["base_dir"], fallback=defaults["base_dir"])

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool, exc: type = TypeError) -> None:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    _reject(
        f"Invalid field '{field}': expected str, received {type(value).__name__}.",
        warnings, strict,
    )
    return fallback


def _as_bool(
        value: Any,
        fallback: Optional[bool],
        field: str,
        warnings: List[str],
        strict: bool,
) -> Optional[bool]:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in _TRUE_WORDS:
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in _FALSE_WORDS:
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    _reject(
        f"Invalid field '{field}': expected bool, received {type(value).__name__}.",
        warnings, strict,
    )
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback
    if isinstance(value, bool):
        _reject(f"Invalid field '{field}': expected int, received bool.", warnings, strict)
        return fallback

    number: Optional[int] = None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and not strict:
        try:
            number = int(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {number}.")
        except ValueError:
            number = None

    if number is None:
        _reject(
            f"Invalid field '{field}': expected int, received {type(value).__name__}.",
            warnings, strict,
        )
        return fallback

    if number < 1:
        _reject(f"Invalid field '{field}': must be >= 1, received {number}.", warnings, strict, ValueError)
        return fallback

    return number


def _as_tristate(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[bool]:
    """Accept True/False or an 'auto' marker (None)."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _AUTO_WORDS:
        return None
    return _as_bool(value, None, field, warnings, strict)
