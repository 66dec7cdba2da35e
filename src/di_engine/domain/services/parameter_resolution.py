"""Parameter Resolution Algorithm.

Merges the literal positional arguments supplied by a template binding with
a constructor's declared parameters, producing the ordered argument list the
constructor is called with.

For each parameter, in declaration order:

    1. The parameter names a class dependency and no value in the argument
       list is already an instance of it: splice in the declared default if
       there is one, otherwise the recursively resolved dependency.
    2. Otherwise, if the supplied arguments have nothing at the parameter's
       realigned index and the parameter declares a default: splice in the
       default.
    3. Otherwise the supplied value stays where it is.

Splicing inserts and shifts later values right; it never overwrites. The
count of values spliced in by rule 1 realigns parameter positions against
the original supplied arguments in rule 2.

Values already present in the list are never re-resolved, so callers can pass
a pre-built object for a typed parameter and have the remaining dependencies
resolved around it.

The "already present" check looks at the whole list built so far, including
values spliced in for earlier parameters. Two parameters declaring the same
class therefore get one resolved value between them, and the list comes out
shorter than the parameter list. Such constructors need both values supplied
explicitly. The list is only guaranteed to cover every parameter when each
declared class appears once, or its values are supplied.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from di_engine.domain.value_objects import Key, ParameterDescriptor

ResolveFn = Callable[[Key], Any]
InstanceCheckFn = Callable[[Any, Key], bool]


def resolve_parameters(
    supplied_args: Sequence[Any],
    descriptors: Sequence[ParameterDescriptor],
    resolve: ResolveFn,
    is_instance: InstanceCheckFn,
) -> list[Any]:
    """Build the ordered constructor argument list.

    Args:
        supplied_args: Literal positional arguments (may be shorter than the
            parameter list).
        descriptors: Constructor parameters in declaration order.
        resolve: Called with a declared type to produce a dependency.
        is_instance: Tells whether a value satisfies a declared type.

    Returns:
        Arguments in constructor order.

    Raises:
        ResolutionError: Propagated from ``resolve``.
    """
    original = list(supplied_args)
    arguments = list(supplied_args)
    inserted = 0

    for index, descriptor in enumerate(descriptors):
        if descriptor.has_declared_type and not _already_supplied(
            descriptor.declared_type, arguments, is_instance
        ):
            if descriptor.has_default:
                value = descriptor.default
            else:
                value = resolve(descriptor.declared_type)
            arguments.insert(index, value)
            inserted += 1
        elif not _has_index(original, index - inserted) and descriptor.has_default:
            arguments.insert(index, descriptor.default)

    return arguments


def _already_supplied(
    declared_type: Key, arguments: Sequence[Any], is_instance: InstanceCheckFn
) -> bool:
    return any(is_instance(value, declared_type) for value in arguments)


def _has_index(values: Sequence[Any], index: int) -> bool:
    return 0 <= index < len(values)
