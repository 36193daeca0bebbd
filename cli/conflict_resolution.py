"""Renames incoming files so they do not collide with stored names or each other."""

from dataclasses import replace
from typing import AbstractSet, List, Sequence

from common.types import FileDescriptor


def split_file_name(name: str) -> tuple[str, str]:
    """
    Split a file name at its last dot.

    A leading dot (as in '.env') does not start an extension.

    Returns:
        (base, extension) where extension keeps its dot or is empty
    """
    last_dot = name.rfind('.')
    if last_dot > 0:
        return name[:last_dot], name[last_dot:]
    return name, ''


def resolve_file_name_conflicts(
    files: Sequence[FileDescriptor],
    existing_names: AbstractSet[str]
) -> List[FileDescriptor]:
    """
    Give every file in the batch a name that is not taken.

    Taken names are the existing names plus the names assigned earlier in
    the batch. A colliding 'base.ext' becomes 'base (n).ext' with the
    smallest free n >= 1. The existing_names set is not modified.

    Args:
        files: Batch in upload order
        existing_names: Names already present on the server

    Returns:
        Descriptors in the same order, renamed where needed
    """
    taken = set(existing_names)
    resolved = []

    for file in files:
        if file.name not in taken:
            taken.add(file.name)
            resolved.append(file)
            continue

        base, extension = split_file_name(file.name)
        counter = 1
        new_name = f"{base} ({counter}){extension}"
        while new_name in taken:
            counter += 1
            new_name = f"{base} ({counter}){extension}"

        taken.add(new_name)
        resolved.append(replace(file, name=new_name))

    return resolved
