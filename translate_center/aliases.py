"""Named runtime values and ``{alias}`` template resolution.

The alias store decouples what goes into a request (``{authToken}``) from
how that value was obtained (a login call). The client writes aliases after
logging in and resolves them whenever it builds a request.

Example::

    store = AliasStore()
    store.set_alias("userUuid", "42")
    store.resolve("users/{userUuid}/projects")  # "users/42/projects"
"""

import re
import threading
from collections.abc import Iterator, Mapping

from translate_center.exceptions import UnknownAliasError


# Matches {name} where name is made of letters, digits, "_", "." or "-"
PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z0-9_.\-]+)\}")


class AliasStore:
    """Thread-safe mapping from alias names to string values.

    Every read and write takes the same lock, so a reader never sees a
    half-applied ``set_aliases`` call and ``resolve`` substitutes from one
    consistent snapshot. No expiry is tracked: a present alias is believed
    valid until somebody overwrites it.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._lock = threading.RLock()

    def has_alias(self, name: str) -> bool:
        """Return True if a value is stored under ``name``."""
        with self._lock:
            return name in self._values

    def has_aliases(self, *names: str) -> bool:
        """Return True if every one of ``names`` is stored."""
        with self._lock:
            return all(name in self._values for name in names)

    def set_alias(self, name: str, value: str) -> None:
        """Store or overwrite a single alias."""
        with self._lock:
            self._values[name] = value

    def set_aliases(self, values: Mapping[str, str]) -> None:
        """Store several aliases in one step.

        Readers observe either none or all of the new values.
        """
        with self._lock:
            self._values.update(values)

    def get_alias(self, name: str) -> str:
        """Return the value stored under ``name``.

        Raises:
            UnknownAliasError: If no value is stored under ``name``.
        """
        with self._lock:
            try:
                return self._values[name]
            except KeyError:
                raise UnknownAliasError(name) from None

    def resolve(self, template: str) -> str:
        """Substitute every ``{name}`` placeholder in ``template``.

        Resolution is all-or-nothing: if any referenced alias is missing,
        nothing is substituted and UnknownAliasError lists all missing names.

        Args:
            template: Any string, e.g. a URI or a header value.

        Returns:
            The template with all placeholders replaced.

        Raises:
            UnknownAliasError: If a referenced alias is not stored.
        """
        with self._lock:
            snapshot = dict(self._values)

        referenced = PLACEHOLDER_PATTERN.findall(template)
        if not referenced:
            return template

        missing = [name for name in dict.fromkeys(referenced) if name not in snapshot]
        if missing:
            raise UnknownAliasError(
                missing,
                message=f"Cannot resolve {template!r}: unknown alias {', '.join(missing)}",
            )

        return PLACEHOLDER_PATTERN.sub(lambda match: snapshot[match.group(1)], template)

    def names(self) -> list[str]:
        """Return the currently stored alias names."""
        with self._lock:
            return list(self._values)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        # values are credentials; only show names
        return f"AliasStore(names={self.names()!r})"
