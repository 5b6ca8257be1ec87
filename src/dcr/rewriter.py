"""Group expansion applied to submitted command lines."""

from __future__ import annotations

from collections.abc import Mapping, Sequence


def expand_groups(
    args: Sequence[str],
    groups: Mapping[str, Sequence[str]] | None,
) -> list[str]:
    """Replace group tokens by their member services.

    Every token naming a group is dropped from its position and the group's
    members are appended, in declared order, after all remaining tokens.
    Members are not looked up again, so a group listing another group's name
    passes that name through unchanged. ``groups=None`` means the project has
    no group support and returns the arguments as they are.
    """
    if groups is None:
        return list(args)

    kept: list[str] = []
    appended: list[str] = []
    for arg in args:
        members = groups.get(arg)
        if members is None:
            kept.append(arg)
        else:
            appended.extend(members)
    return kept + appended
