"""Pre-provision step sequencing."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterator

logger = logging.getLogger(__name__)


class ProvisionStep(str, Enum):
    """Step names the host workflow engine knows how to invoke."""

    CREATE_DESTINATION = "create_destination"
    PREPARE_VOLUMES = "prepare_volumes"
    PREPARE_NETWORKS = "prepare_networks"
    PREPARE_PROVISION = "prepare_provision"
    POST_CREATE_DESTINATION = "post_create_destination"


INITIAL_STEP = ProvisionStep.CREATE_DESTINATION

_NEXT_STEP = {
    ProvisionStep.CREATE_DESTINATION: ProvisionStep.PREPARE_VOLUMES,
    ProvisionStep.PREPARE_VOLUMES: ProvisionStep.PREPARE_NETWORKS,
    ProvisionStep.PREPARE_NETWORKS: ProvisionStep.PREPARE_PROVISION,
    ProvisionStep.PREPARE_PROVISION: ProvisionStep.PREPARE_PROVISION,
    ProvisionStep.POST_CREATE_DESTINATION: ProvisionStep.POST_CREATE_DESTINATION,
}

_TERMINAL_STEPS = {
    ProvisionStep.PREPARE_PROVISION,
    ProvisionStep.POST_CREATE_DESTINATION,
}


def next_step(step: ProvisionStep) -> ProvisionStep:
    """Return the step that follows ``step``; terminal steps map to themselves."""
    return _NEXT_STEP[step]


def is_terminal(step: ProvisionStep) -> bool:
    return step in _TERMINAL_STEPS


class PreProvisionSequencer:
    """Advance the host through the steps that run before submission.

    Volume and network creation are not implemented yet, so each step only
    signals its successor.
    """

    def __init__(self, signal: Callable[[str], None]) -> None:
        self._signal = signal
        self._step = INITIAL_STEP

    @property
    def step(self) -> ProvisionStep:
        return self._step

    def create_destination(self) -> None:
        self._advance(ProvisionStep.CREATE_DESTINATION)

    def prepare_volumes(self) -> None:
        # TODO: create the volumes requested on the Volumes tab.
        self._advance(ProvisionStep.PREPARE_VOLUMES)

    def prepare_networks(self) -> None:
        # TODO: create additional networks requested by the user.
        self._advance(ProvisionStep.PREPARE_NETWORKS)

    def run(self, step: ProvisionStep) -> ProvisionStep:
        """Dispatch a host step by name and return the signalled step."""
        if is_terminal(step):
            return step
        getattr(self, step.value)()
        return self._step

    def walk(self) -> Iterator[ProvisionStep]:
        """Yield every step from the current one through the terminal hand-off."""
        step = self._step
        yield step
        while not is_terminal(step):
            step = self.run(step)
            yield step

    def _advance(self, current: ProvisionStep) -> None:
        target = next_step(current)
        logger.debug("Pre-provision step %s -> %s", current.value, target.value)
        self._step = target
        self._signal(target.value)
