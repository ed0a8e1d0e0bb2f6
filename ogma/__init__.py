"""Ogma: natural-language DSLs built from clause templates."""

from . import constants as _constants
from . import runtime as _runtime
from . import binding as _binding
from .constants import *  # noqa: F401,F403
from .runtime import *  # noqa: F401,F403
from .binding import *  # noqa: F401,F403

__all__ = []
__all__ += getattr(_constants, "__all__", [])
__all__ += getattr(_runtime, "__all__", [])
__all__ += getattr(_binding, "__all__", [])
