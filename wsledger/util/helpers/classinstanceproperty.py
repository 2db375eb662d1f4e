# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from collections.abc import Callable
from typing import Any, override


# NOTE: Extends property so that pydantic and other introspection code treat it like any other property
class ClassInstancePropertyDescriptor[T](property):
    """Read-only property accessible from both a class and its instances.

    The wrapped function receives the instance when accessed through an instance, or the class when accessed through the class.
    """

    def __init__(self, fget: Callable[[Any], T]) -> None:
        self.getter: Callable[[Any], T] = fget

    @override
    def __get__(self, obj: Any, cls: type | None = None) -> T:  # pyright: ignore[reportIncompatibleMethodOverride]
        return self.getter(obj if obj is not None else cls)

    @override
    def __set__(self, obj: Any, value: Any) -> None:
        msg = "Can't set classinstanceproperty descriptor"
        raise AttributeError(msg)

    @override
    def __delete__(self, obj: Any) -> None:
        msg = "Can't delete classinstanceproperty descriptor"
        raise AttributeError(msg)


def classinstanceproperty[T](func: Callable[[Any], T]) -> ClassInstancePropertyDescriptor[T]:
    return ClassInstancePropertyDescriptor(func)
