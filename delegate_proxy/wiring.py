"""Installing a proxy into a host's data source and delegate slots.

The host keeps whatever attributes it uses to reach its collaborators; the
helpers here swap those attributes for a proxy and put the previous values
back afterwards.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sequence

from .proxy import InterceptingProxy

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTES = ("data_source", "delegate")

_MISSING = object()


def install_proxy(
    host: Any,
    proxy: InterceptingProxy,
    attributes: Sequence[str] = DEFAULT_ATTRIBUTES,
) -> Callable[[], None]:
    """Point each of ``host``'s ``attributes`` at ``proxy``.

    Returns a callable that restores the previous values. Attributes the
    host did not have before are removed again on restore.
    """

    previous = [(name, getattr(host, name, _MISSING)) for name in attributes]
    for name in attributes:
        setattr(host, name, proxy)
    logger.debug(f"Installed proxy on {type(host).__name__}: {', '.join(attributes)}")

    def restore():
        for name, value in reversed(previous):
            if value is _MISSING:
                delattr(host, name)
            else:
                setattr(host, name, value)
        logger.debug(f"Restored {type(host).__name__}: {', '.join(attributes)}")

    return restore


@contextmanager
def intercepting(
    host: Any,
    target: Any,
    *,
    attributes: Sequence[str] = DEFAULT_ATTRIBUTES,
    **options: Any,
) -> Iterator[InterceptingProxy]:
    """Route ``host``'s calls to ``target`` through a proxy inside the block."""

    proxy = InterceptingProxy.create(target, **options)
    restore = install_proxy(host, proxy, attributes)
    try:
        yield proxy
    finally:
        restore()
