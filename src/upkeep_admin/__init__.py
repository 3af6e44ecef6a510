"""Upkeep admin package root.

The public API surface is the UpkeepAdmin façade, the collaborator protocols
it needs and the schema types exposed in ``upkeep_admin.schemas``.
"""

__version__ = "0.1.0"

from upkeep_admin.admin import UpkeepAdmin  # noqa: F401
from upkeep_admin.runtime.broadcaster import Broadcaster, Signer, StaticSigner  # noqa: F401
from upkeep_admin.schemas import *  # noqa: F401,F403
from upkeep_admin.schemas import __all__ as SCHEMA_EXPORTS

__all__ = ["__version__", "UpkeepAdmin", "Broadcaster", "Signer", "StaticSigner"] + SCHEMA_EXPORTS
