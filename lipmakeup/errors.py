class MakeupError(ValueError):
    """Base class for every error raised by the lip makeup pipeline."""


class InvalidRegion(MakeupError):
    """Color analysis region has no pixels inside the buffer."""


class InvalidColorFormat(MakeupError):
    """Target color is not '#RRGGBB' or has components outside 0~255."""


class InsufficientLandmarks(MakeupError):
    """Fewer mouth points than the 12 outer-lip points required."""


class DimensionMismatch(MakeupError):
    """Mask and source buffer disagree on height / width."""


class PresetError(MakeupError):
    """Preset file failed validation."""
