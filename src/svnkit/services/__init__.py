"""Read, write, and combined ``svn`` services."""

from .base import SvnBaseService
from .facade import SvnService
from .read import SvnReadService
from .write import SvnWriteService

__all__ = ["SvnBaseService", "SvnReadService", "SvnService", "SvnWriteService"]
