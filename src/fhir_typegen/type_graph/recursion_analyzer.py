"""Self-reference detection between Groups of one definition."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from .graph_models import EmissionForm, Group, TypeRef


def group_references(
    resolved_members: Mapping[str, Iterable[TypeRef]],
) -> dict[str, frozenset[str]]:
    """Map each Group name to the same-module Group names its members' TypeRefs name."""
    references: dict[str, frozenset[str]] = {}
    for group_name, type_refs in resolved_members.items():
        targets: set[str] = set()
        for type_ref in type_refs:
            targets |= type_ref.same_module_targets()
        references[group_name] = frozenset(targets)
    return references


def reachable_groups(group_name: str, references: Mapping[str, frozenset[str]]) -> set[str]:
    """Return every Group reached by following same-module references from a Group."""
    reached: set[str] = set()
    pending = list(references.get(group_name, ()))
    while pending:
        current = pending.pop()
        if current in reached:
            continue
        reached.add(current)
        pending.extend(references.get(current, ()))
    return reached


def is_recursive(group_name: str, references: Mapping[str, frozenset[str]]) -> bool:
    """Return True when following same-module references from a Group leads back to it."""
    return group_name in reachable_groups(group_name, references)


def select_emission_forms(
    groups: Sequence[Group], references: Mapping[str, frozenset[str]]
) -> dict[str, EmissionForm]:
    """Pick eager or deferred validator emission for every Group.

    A Group is eager only when every Group its validator reaches, directly or
    through other Groups, is emitted before it. Recursive Groups reach
    themselves and are therefore always deferred.
    """
    position = {group.name: index for index, group in enumerate(groups)}
    forms: dict[str, EmissionForm] = {}
    for index, group in enumerate(groups):
        reached = reachable_groups(group.name, references)
        if any(position.get(target, -1) >= index for target in reached):
            forms[group.name] = EmissionForm.DEFERRED
        else:
            forms[group.name] = EmissionForm.EAGER
    return forms
