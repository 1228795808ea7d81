import json
import logging
import os

from lipmakeup.color import HEX_COLOR_RE, parse_hex_color
from lipmakeup.errors import PresetError

logger = logging.getLogger(__name__)

DEFAULT_PARAMS = {
    # Color
    "LIP_COLOR_HEX": "#FF0000",
    "LIPSTICK_OPACITY": 0.9,
    "BLEND_GAMMA": 1.2,

    # Mask
    "MAX_DIST": 15.0,
    "MASK_FALLOFF": 1.5,

    # Shimmer
    "SHIMMER": True,
    "DOUBLE_SHIMMER": False,

    # Runtime
    "WORKERS": 1,
}

PRESET_KEYS = list(DEFAULT_PARAMS)

# key -> (min, max), inclusive
NUMERIC_RANGES = {
    "LIPSTICK_OPACITY": (0.0, 1.0),
    "BLEND_GAMMA": (0.01, 10.0),
    "MAX_DIST": (0.5, 500.0),
    "MASK_FALLOFF": (0.01, 10.0),
    "WORKERS": (1, 64),
}


def hex_to_rgb(hex_color):
    return list(parse_hex_color(hex_color))


def validate_preset(data):
    """
    return: list of error strings (empty when valid)
    """
    errors = []

    hex_val = data.get("LIP_COLOR_HEX")
    if hex_val is not None:
        if not isinstance(hex_val, str) or not HEX_COLOR_RE.match(hex_val):
            errors.append(f"Invalid HEX format '{hex_val}'")
        else:
            rgb_val = data.get("LIP_COLOR_RGB")
            if rgb_val is not None and list(rgb_val) != hex_to_rgb(hex_val):
                errors.append(
                    f"Mismatch! HEX {hex_val} -> {hex_to_rgb(hex_val)}, but file has {rgb_val}"
                )

    for k, (lo, hi) in NUMERIC_RANGES.items():
        if k not in data:
            continue
        v = data[k]
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            errors.append(f"{k} must be a number, got {v!r}")
        elif not lo <= v <= hi:
            errors.append(f"{k}={v} outside [{lo}, {hi}]")

    for k in ("SHIMMER", "DOUBLE_SHIMMER"):
        if k in data and not isinstance(data[k], bool):
            errors.append(f"{k} must be true/false, got {data[k]!r}")

    return errors


def resolve_params(params=None):
    """Defaults overlaid with the known keys of params."""
    merged = dict(DEFAULT_PARAMS)
    if params:
        merged.update({k: v for k, v in params.items() if k in DEFAULT_PARAMS})
    return merged


def load_preset(path, filter_keys=None):
    """
    Load a preset JSON onto the defaults.
    If filter_keys is provided, only those keys are taken from the file.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            preset = json.load(f)
        except json.JSONDecodeError as exc:
            raise PresetError(f"{os.path.basename(path)}: JSON Decode Error") from exc

    if filter_keys is not None:
        preset = {k: v for k, v in preset.items() if k in filter_keys}

    errors = validate_preset(preset)
    if errors:
        raise PresetError(f"{os.path.basename(path)}: " + "; ".join(errors))

    logger.debug("loaded preset %s", path)
    return resolve_params(preset)


def export_preset(params, path):
    """
    Save only known preset keys, plus LIP_COLOR_RGB for external usage.
    """
    preset = resolve_params(params)

    errors = validate_preset(preset)
    if errors:
        raise PresetError("; ".join(errors))

    preset["LIP_COLOR_RGB"] = hex_to_rgb(preset["LIP_COLOR_HEX"])

    with open(path, "w", encoding="utf-8") as f:
        json.dump(preset, f, indent=2, ensure_ascii=False)

    return path
