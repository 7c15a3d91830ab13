"""Compilation services."""

from .compile_service import CompileService, create_compile_service


__all__ = ["CompileService", "create_compile_service"]
