"""Backend package - emits and assembles converting overrides."""

from .accessor import MethodHandle, PrivateMemberAccessor
from .emit import OverrideEmitter
from .synthesize import ORIGIN_ATTR, class_name_for, convert_argument, convert_sequence, synthesize

__all__ = [
    "MethodHandle",
    "ORIGIN_ATTR",
    "OverrideEmitter",
    "PrivateMemberAccessor",
    "class_name_for",
    "convert_argument",
    "convert_sequence",
    "synthesize",
]
