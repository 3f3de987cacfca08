from __future__ import annotations

import dataclasses
import importlib
from collections.abc import Callable
from typing import Any

import structlog

from pydiverse.isclose._internal.tolerance import Tolerance

logger = structlog.get_logger(__name__)

# Signature of a primitive: (lhs, rhs, rel_tol, abs_tol) -> bool
ImplFn = Callable[[Any, Any, Any, Any], bool]


@dataclasses.dataclass(slots=True)
class Impl:
    fn: ImplFn
    tolerance: Tolerance | Callable[[Any], Tolerance]

    def default_tolerance(self, value: Any) -> Tolerance:
        if isinstance(self.tolerance, Tolerance):
            return self.tolerance
        return self.tolerance(value)


class ImplStore:
    """
    Maps python types to approximate comparison implementations.

    Lookup walks the MRO of the type, so an implementation registered for a class
    also covers its subclasses unless they have a more specific one. Adapters for
    third party libraries are imported the first time a value of that library is
    looked up.
    """

    __slots__ = ("impls", "adapters", "loaded_adapters", "impl_manager")

    impls: dict[type, Impl]
    adapters: dict[str, str]
    loaded_adapters: set[str]
    impl_manager: ImplContextManager

    def __init__(self, adapters: dict[str, str] | None = None) -> None:
        self.impls = dict()
        self.adapters = dict(adapters) if adapters is not None else dict()
        self.loaded_adapters = set()
        self.impl_manager = ImplContextManager(self)

    def add_impl(
        self,
        cls: type,
        f: ImplFn,
        tolerance: Tolerance | Callable[[Any], Tolerance],
    ) -> None:
        if cls in self.impls:
            raise ValueError(
                f"an implementation for `{cls.__qualname__}` is already registered"
            )
        self.impls[cls] = Impl(f, tolerance)
        logger.debug("registered isclose impl", cls=cls.__qualname__)

    def get_impl(self, cls: type) -> Impl | None:
        impl = self._lookup(cls)
        if impl is None and self.load_adapter(cls):
            impl = self._lookup(cls)
        return impl

    def _lookup(self, cls: type) -> Impl | None:
        for base in cls.__mro__:
            if (impl := self.impls.get(base)) is not None:
                return impl
        # abstract base classes like `Mapping` do not show up in the MRO of
        # virtual subclasses
        matches = [base for base in self.impls if issubclass(cls, base)]
        for base in matches:
            if not any(
                other is not base and issubclass(other, base) for other in matches
            ):
                return self.impls[base]
        return None

    def load_adapter(self, cls: type) -> bool:
        """
        Imports the adapter for the library `cls` comes from. Returns whether a new
        adapter was loaded.
        """
        library = cls.__module__.partition(".")[0]
        module = self.adapters.get(library)
        if module is None or library in self.loaded_adapters:
            return False

        self.loaded_adapters.add(library)
        importlib.import_module(module)
        logger.debug("loaded isclose adapter", library=library, module=module)
        return True


@dataclasses.dataclass(slots=True)
class ImplContextManager:
    impl_store: ImplStore

    def __enter__(self):
        return self

    def __exit__(self, *args): ...

    def __call__(
        self,
        cls: type,
        *,
        tolerance: Tolerance | Callable[[Any], Tolerance],
    ) -> Callable[[ImplFn], ImplFn]:
        assert isinstance(cls, type)

        def f(g):
            self.impl_store.add_impl(cls, g, tolerance)
            return g

        return f


ADAPTERS = {
    "numpy": "pydiverse.isclose._internal.adapters.numpy",
    "polars": "pydiverse.isclose._internal.adapters.polars",
    "pandas": "pydiverse.isclose._internal.adapters.pandas",
    "ml_dtypes": "pydiverse.isclose._internal.adapters.ml_dtypes",
}

IMPLS = ImplStore(ADAPTERS)
