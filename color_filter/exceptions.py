"""Custom exceptions for color filtering."""


class ColorFilterError(Exception):
    """Base exception for color filtering errors."""

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(message)
        self.user_message = user_message or message


class ImageReadError(ColorFilterError):
    """Failed to read input image."""

    def __init__(self, path: str):
        super().__init__(
            f"Could not read image: {path}",
            "Could not read image file. The file may be corrupted or in an unsupported format.",
        )


class ImageWriteError(ColorFilterError):
    """Failed to write output image."""

    def __init__(self, path: str):
        super().__init__(
            f"Could not write image: {path}",
            "Could not write output image. Check the file extension and that the directory exists.",
        )


class InvalidImageError(ColorFilterError):
    """Input is not a non-empty 3-channel 8-bit image."""

    def __init__(self, detail: str = ""):
        msg = f"Invalid image: {detail}" if detail else "Invalid image"
        super().__init__(msg, "Input must be a non-empty 8-bit RGB image.")


class InvalidBoundsShapeError(ColorFilterError):
    """Bound vector does not hold 2 or 6 numbers."""

    def __init__(self, detail: str = ""):
        msg = f"Invalid bounds: {detail}" if detail else "Invalid bounds"
        super().__init__(
            msg,
            "Bounds must be 6 numbers (lower/upper per channel) or 2 numbers (lower, upper).",
        )


class InvalidBoundsForModeError(ColorFilterError):
    """Bound count does not match the selected mode."""

    def __init__(self, count: int, mode: int):
        super().__init__(
            f"{count} bounds given for mode {mode}",
            "Invalid number of bounds for this mode: modes 0 and 1 take 6 bounds, "
            "modes 2 and 3 take 2.",
        )


class InvalidModeError(ColorFilterError):
    """Mode selector outside 0-3."""

    def __init__(self, mode: object):
        super().__init__(
            f"Invalid mode: {mode!r}",
            "Mode must be 0 (channel), 1 (ratio), 2 (sum) or 3 (spread).",
        )


class InvalidColorError(ColorFilterError):
    """Replacement color is not three values in 0-255."""

    def __init__(self, color: object):
        super().__init__(
            f"Invalid replacement color: {color!r}",
            "Replacement color must be three integers from 0 to 255 (e.g. 255,0,0).",
        )


class InvalidRegionError(ColorFilterError):
    """Requested crop does not fit inside the image."""

    def __init__(self, detail: str = ""):
        msg = f"Invalid region: {detail}" if detail else "Invalid region"
        super().__init__(
            msg,
            "Requested height and width must be positive and no larger than the image.",
        )


class InvalidConfigError(ColorFilterError):
    """Filter configuration could not be parsed."""

    def __init__(self, detail: str):
        super().__init__(f"Invalid filter config: {detail}", f"Invalid --config: {detail}")
