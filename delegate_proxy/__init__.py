"""Client-facing exports for delegate_proxy."""

from .capabilities import (
    DATA_SOURCE,
    DELEGATE,
    GLOBAL_CAPABILITIES,
    TABLE_VIEW,
    CapabilityRegistry,
    CapabilitySet,
    MethodSpec,
)
from .config import ProxyConfig
from .errors import InvalidTarget, ProxyError, UnsupportedMethod
from .proxy import InterceptingProxy, proxy_for, target_of
from .recorder import (
    CallbackRecorder,
    CallRecord,
    CallRecorder,
    FanoutRecorder,
    LoggingRecorder,
    MemoryRecorder,
    NoopRecorder,
    format_arguments,
)
from .wiring import install_proxy, intercepting

__all__ = [
    "CallRecord",
    "CallRecorder",
    "CallbackRecorder",
    "CapabilityRegistry",
    "CapabilitySet",
    "DATA_SOURCE",
    "DELEGATE",
    "FanoutRecorder",
    "GLOBAL_CAPABILITIES",
    "InterceptingProxy",
    "InvalidTarget",
    "LoggingRecorder",
    "MemoryRecorder",
    "MethodSpec",
    "NoopRecorder",
    "ProxyConfig",
    "ProxyError",
    "TABLE_VIEW",
    "UnsupportedMethod",
    "format_arguments",
    "install_proxy",
    "intercepting",
    "proxy_for",
    "target_of",
]
