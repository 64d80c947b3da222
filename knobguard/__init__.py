"""
knobguard: protector imprimible para la antena y los dos mandos de una radio.

Uso rápido:

    from knobguard import load_config, build_radio_guard
    mesh = build_radio_guard(load_config({"tolerance": 0.4}))
    mesh.export("guard.stl")
"""
from __future__ import annotations

from .config import DEFAULTS, TYPES, ConfigError, GuardConfig, GuardSpec, load_config
from .kernel import GeometryKernel, KernelError, TrimeshKernel
from .radio_guard import NAME, build_parts, build_radio_guard, make_model

__version__ = "0.1.0"

__all__ = [
    "NAME", "DEFAULTS", "TYPES",
    "ConfigError", "KernelError",
    "GuardConfig", "GuardSpec", "load_config",
    "GeometryKernel", "TrimeshKernel",
    "build_parts", "build_radio_guard", "make_model",
]
