"""Protocol definitions for Sketchbox adapters and collaborators.

This package provides standard Protocol classes that define the interfaces
the compile pipeline consumes. These protocols use Python's typing.Protocol
system with the @runtime_checkable decorator to enable both static type
checking and runtime isinstance() checks.
"""

from .board_protocols import PackageManagerProtocol, PackageManagerRegistryProtocol
from .build_engine_protocols import BuildEngineProtocol
from .file_adapter_protocol import FileAdapterProtocol
from .sketch_protocols import SketchLoaderProtocol


__all__ = [
    "BuildEngineProtocol",
    "FileAdapterProtocol",
    "PackageManagerProtocol",
    "PackageManagerRegistryProtocol",
    "SketchLoaderProtocol",
]
