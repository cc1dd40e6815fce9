"""Pixelwise color filtering of images by threshold policies."""

__version__ = "0.1.0"


def __getattr__(name):
    """Lazy import to avoid loading numpy for CLI subcommands that don't need it."""
    if name in ("filter_image", "run_filter"):
        from .pipeline import filter_image, run_filter
        return {"filter_image": filter_image, "run_filter": run_filter}[name]
    if name == "select_region":
        from .region import select_region
        return select_region
    if name == "evaluate_mask":
        from .policies import evaluate_mask
        return evaluate_mask
    if name == "composite":
        from .compositor import composite
        return composite
    if name in ("FilterConfig", "FilterResult", "PolicyMode", "ThresholdBounds"):
        from .models import FilterConfig, FilterResult, PolicyMode, ThresholdBounds
        return {
            "FilterConfig": FilterConfig,
            "FilterResult": FilterResult,
            "PolicyMode": PolicyMode,
            "ThresholdBounds": ThresholdBounds,
        }[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "filter_image",
    "run_filter",
    "select_region",
    "evaluate_mask",
    "composite",
    "FilterConfig",
    "FilterResult",
    "PolicyMode",
    "ThresholdBounds",
]
