"""
Table tree with the bookkeeping TOML's redefinition rules need.

Values live in plain dicts and lists. Next to them, TableTree records by
absolute key path how each table came to exist:

- header: declared by ``[a.b]``; a second declaration is an error
- dotted: created by a dotted key in an earlier table section; closed to
  headers and to dotted keys of later sections
- pending: created by a dotted key in the current section; still open to
  further dotted keys until the next header
- aot: arrays created by ``[[a.b]]``; headers and dotted keys descend into
  their last element
- frozen: inline tables and arrays bound as values; nothing may extend them
"""
from __future__ import annotations

from typing import Any

Key = tuple[str, ...]


class KeyConflict(Exception):
    """A key path cannot be bound or extended; message says why."""


def format_key(key: Key) -> str:
    """Render a key path the way it would be written in TOML."""
    parts = []
    for part in key:
        if part and all(c.isascii() and (c.isalnum() or c in "-_") for c in part):
            parts.append(part)
        else:
            parts.append('"' + part.replace("\\", "\\\\").replace('"', '\\"') + '"')
    return ".".join(parts)


class TableTree:
    """Root table plus the per-path ledger used to reject redefinitions."""

    def __init__(self) -> None:
        self.root: dict[str, Any] = {}
        self._header: set[Key] = set()
        self._dotted: set[Key] = set()
        self._pending: set[Key] = set()
        self._aot: set[Key] = set()
        self._frozen: set[Key] = set()

    def close_section(self) -> None:
        """End the current table section: its dotted tables become closed."""
        self._dotted |= self._pending
        self._pending.clear()

    def is_frozen(self, key: Key) -> bool:
        return any(key[:i] in self._frozen for i in range(1, len(key) + 1))

    def declare_table(self, key: Key) -> dict[str, Any]:
        """Handle a ``[key]`` header and return the table it opens."""
        self.close_section()
        if key in self._header:
            raise KeyConflict(f"table {format_key(key)} is already defined")
        if key in self._dotted:
            raise KeyConflict(f"table {format_key(key)} was already defined by dotted keys")
        if key in self._aot:
            raise KeyConflict(f"{format_key(key)} is an array of tables, not a table")
        if self.is_frozen(key):
            raise KeyConflict(f"cannot extend inline value {format_key(key)}")
        table = self._descend(key)
        self._header.add(key)
        return table

    def append_table(self, key: Key) -> dict[str, Any]:
        """Handle a ``[[key]]`` header and return the new array element."""
        self.close_section()
        if self.is_frozen(key):
            raise KeyConflict(f"cannot extend inline value {format_key(key)}")
        parent = self._descend(key[:-1])
        stem = key[-1]
        table: dict[str, Any] = {}
        if stem not in parent:
            parent[stem] = [table]
            self._aot.add(key)
        elif key in self._aot:
            parent[stem].append(table)
        else:
            raise KeyConflict(f"cannot append to {format_key(key)}: it is not an array of tables")
        self._forget_below(key)
        return table

    def bind(self, section: Key, key: Key, value: Any) -> None:
        """
        Bind a ``key = value`` line found in the given table section.

        Intermediate tables named by a dotted key are created on demand.

        Raises:
            KeyConflict: if the key is already bound or its path runs into
                something that cannot be extended.
        """
        parent_key = section + key[:-1]
        if self.is_frozen(parent_key):
            raise KeyConflict(f"cannot extend inline value {format_key(parent_key)}")
        for i in range(len(section) + 1, len(parent_key) + 1):
            path = parent_key[:i]
            if path in self._header or path in self._dotted or path in self._aot:
                raise KeyConflict(f"cannot extend table {format_key(path)} with dotted keys")
        nest = self._descend(parent_key)
        full_key = parent_key + key[-1:]
        if key[-1] in nest:
            raise KeyConflict(f"duplicate key {format_key(full_key)}")
        for i in range(len(section) + 1, len(parent_key) + 1):
            self._pending.add(parent_key[:i])
        nest[key[-1]] = value
        if isinstance(value, (dict, list)):
            self._frozen.add(full_key)

    def _descend(self, key: Key) -> dict[str, Any]:
        node = self.root
        for i, part in enumerate(key):
            if part not in node:
                node[part] = {}
            child = node[part]
            if isinstance(child, list):
                if key[: i + 1] not in self._aot:
                    raise KeyConflict(f"{format_key(key[: i + 1])} is an array, not a table")
                child = child[-1]
            elif not isinstance(child, dict):
                raise KeyConflict(
                    f"{format_key(key[: i + 1])} is a {type(child).__name__} value, not a table"
                )
            node = child
        return node

    def _forget_below(self, key: Key) -> None:
        # A new array element starts with a clean slate beneath its key.
        n = len(key)
        for ledger in (self._header, self._dotted, self._pending, self._aot, self._frozen):
            stale = {k for k in ledger if len(k) > n and k[:n] == key}
            ledger -= stale
