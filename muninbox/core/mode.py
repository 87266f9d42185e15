"""Plugin invocation modes."""

from enum import Enum


class Mode(Enum):
    """The mode munin-node runs a plugin in, taken from its first argument."""

    CONFIG = "config"
    AUTOCONF = "autoconf"
    FETCH = "fetch"

    @classmethod
    def from_args(cls, args: list[str]) -> "Mode":
        """
        Select the mode from command-line arguments.

        Only an exact ``config`` or ``autoconf`` selects those modes; no
        argument, or anything else, means fetch.
        """
        if args:
            if args[0] == cls.CONFIG.value:
                return cls.CONFIG
            if args[0] == cls.AUTOCONF.value:
                return cls.AUTOCONF
        return cls.FETCH
