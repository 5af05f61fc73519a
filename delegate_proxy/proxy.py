"""The intercepting proxy.

An :class:`InterceptingProxy` stands in for a target object. Every method
call made through it is recorded and then forwarded to the target with the
same arguments; the target's return value, or its exception, reaches the
caller unchanged. The proxy does not know the target's methods in advance,
it resolves each call by name against the target.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Iterable, Mapping, Optional

from .capabilities import TABLE_VIEW, CapabilitySet, implements
from .config import ProxyConfig
from .errors import InvalidTarget, UnsupportedMethod
from .recorder import CallRecord, CallRecorder, LoggingRecorder, NoopRecorder

logger = logging.getLogger(__name__)


class InterceptingProxy:
    """Record-and-forward stand-in for ``target``.

    Attribute access on the proxy resolves against the target: callables
    come back as forwarders that go through :meth:`handle`, plain values are
    returned as-is and missing names raise ``AttributeError`` exactly as
    they would on the target. ``isinstance`` checks see the target's class.

    The proxy's own public surface is limited to :meth:`handle`,
    :meth:`responds_to` and :meth:`conforms_to`; a target method with one of
    those names has to be called through :meth:`handle`.
    """

    __slots__ = (
        "_target",
        "_recorder",
        "_capabilities",
        "_skip_args",
        "_max_length",
        "_timestamps",
    )

    def __init__(
        self,
        target: Any,
        *,
        recorder: Optional[CallRecorder] = None,
        capabilities: CapabilitySet = TABLE_VIEW,
        config: Optional[ProxyConfig] = None,
        skip_args: Optional[int] = None,
    ) -> None:
        if target is None:
            raise InvalidTarget()

        config = config or ProxyConfig()
        if recorder is None and not config.record_calls:
            recorder = NoopRecorder()
        elif recorder is None:
            recorder = LoggingRecorder(config.logger(), config.level)

        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_recorder", recorder)
        object.__setattr__(self, "_capabilities", capabilities)
        object.__setattr__(
            self,
            "_skip_args",
            config.skip_leading_args if skip_args is None else skip_args,
        )
        object.__setattr__(self, "_max_length", config.max_argument_length)
        object.__setattr__(self, "_timestamps", config.record_timestamps)

        logger.debug(
            f"Created proxy for {type(target).__name__} posing as {capabilities.name}"
        )

    @classmethod
    def create(cls, target: Any, **options: Any) -> "InterceptingProxy":
        return cls(target, **options)

    # Capability queries -----------------------------------------------------

    def responds_to(self, name: str) -> bool:
        """Return whether the target implements ``name``, without calling it."""

        return implements(self._target, name)

    def conforms_to(self, capabilities: Optional[CapabilitySet] = None) -> bool:
        """Return whether the target provides every required method."""

        if capabilities is None:
            capabilities = self._capabilities
        return capabilities.is_satisfied_by(self._target)

    @property
    def __class__(self):
        return type(self._target)

    # Dispatch ---------------------------------------------------------------

    def handle(
        self,
        name: str,
        args: Iterable[Any] = (),
        kwargs: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Record the call, then forward it to the target.

        Raises :class:`UnsupportedMethod` without recording or forwarding
        when the target does not implement ``name``. Whatever the target
        raises propagates unchanged.
        """

        target = self._target
        if not implements(target, name):
            raise UnsupportedMethod(name, type(target).__name__)

        args = tuple(args)
        kwargs = dict(kwargs or {})
        self._recorder.record(
            CallRecord.capture(
                name,
                args,
                kwargs,
                target=target,
                skip=self._skip_args,
                max_length=self._max_length,
                timestamp=self._timestamps,
            )
        )
        return getattr(target, name)(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)

        target = object.__getattribute__(self, "_target")
        # properties stay plain data, even when their value is callable
        if not implements(target, name):
            return getattr(target, name)

        @functools.wraps(getattr(target, name))
        def forward(*args, **kwargs):
            return self.handle(name, args, kwargs)

        return forward

    # Immutability -----------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __dir__(self):
        return sorted(set(dir(self._target)) | {"handle", "responds_to", "conforms_to"})

    def __repr__(self) -> str:
        return f"<{type(self).__name__} for {self._target!r}>"


def proxy_for(target: Any, **options: Any) -> InterceptingProxy:
    """Shortcut for :meth:`InterceptingProxy.create`."""

    return InterceptingProxy.create(target, **options)


def target_of(proxy: InterceptingProxy) -> Any:
    """Return the object ``proxy`` forwards to."""

    return object.__getattribute__(proxy, "_target")
