"""Board and platform lookup."""

from .models import FQBN, Platform, ResolvedBoard
from .package_manager import (
    DirectoryPackageManager,
    PackageManagerRegistry,
    create_package_manager,
)


__all__ = [
    "FQBN",
    "Platform",
    "ResolvedBoard",
    "DirectoryPackageManager",
    "PackageManagerRegistry",
    "create_package_manager",
]
