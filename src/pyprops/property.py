from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, order=True)
class Property:
    """A single key/value pair read from a properties file."""
    key: str
    value: str

    def astuple(self) -> Tuple[str, str]:
        return self.key, self.value

    def __str__(self):
        return '%s=%s' % (self.key, self.value)


__all__ = ['Property', ]
