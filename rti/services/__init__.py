"""Service layer - orchestration on top of runtimes and install primitives."""

from rti.services.injector import InjectPlan, InjectResult, RuntimeInjector
from rti.services.options import InjectOptions
from rti.services.urls import UrlCheck, UrlCheckService

__all__ = [
    "InjectOptions",
    "InjectPlan",
    "InjectResult",
    "RuntimeInjector",
    "UrlCheck",
    "UrlCheckService",
]
