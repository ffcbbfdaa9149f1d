"""Enablement registry: the persisted list of disabled module names."""


class EnablementRegistry:
    """
    View over the disabled module names of a HostConfig.

    The list is wrapped by reference, so changes land in the config object
    and are persisted when the host saves it.
    """

    def __init__(self, disabled: list[str]):
        self._disabled = disabled

    def is_disabled(self, name: str) -> bool:
        return name in self._disabled

    def disable(self, name: str) -> bool:
        """
        Disable a module.

        Returns:
            True if the name was added, False if it was already disabled
        """
        if name in self._disabled:
            return False
        self._disabled.append(name)
        return True

    def enable(self, name: str) -> bool:
        """
        Enable a module.

        Returns:
            True if the name was removed, False if it was not disabled
        """
        if name not in self._disabled:
            return False
        self._disabled.remove(name)
        return True

    @property
    def names(self) -> list[str]:
        return list(self._disabled)

    def __contains__(self, name: str) -> bool:
        return self.is_disabled(name)

    def __len__(self) -> int:
        return len(self._disabled)
