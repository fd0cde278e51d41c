from normalization.ratio import MAX_INTENSITY, normalize_bright_background
from normalization.channels import normalize_background

__all__ = ("MAX_INTENSITY", "normalize_background", "normalize_bright_background")
