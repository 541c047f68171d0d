"""Scaffolding generators for host applications."""

from .install import InstallGenerator, install

__all__ = ["InstallGenerator", "install"]
