"""
Dependency Injection Container

Wires the narrative generator, the simulation service and the console
display from settings.
"""

import random
from dataclasses import dataclass, field
from typing import Optional

from netcascade.application import SimulationService
from netcascade.cli.display import ConsoleDisplay
from netcascade.simulation import NarrativeGenerator

from .settings import Settings


@dataclass
class Container:
    """
    Dependency injection container.

    Services are created lazily and cached for the container's lifetime.
    """
    decentralization: int = 0
    use_color: bool = True
    seed: Optional[int] = None

    _narrator: Optional[NarrativeGenerator] = field(default=None, repr=False)
    _simulation: Optional[SimulationService] = field(default=None, repr=False)
    _display: Optional[ConsoleDisplay] = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Container":
        """Create container from settings."""
        return cls(
            decentralization=settings.decentralization,
            use_color=not settings.no_color,
            seed=settings.seed,
        )

    def narrator(self) -> NarrativeGenerator:
        if self._narrator is None:
            rng = random.Random(self.seed) if self.seed is not None else None
            self._narrator = NarrativeGenerator(rng=rng)
        return self._narrator

    def simulation_service(self) -> SimulationService:
        """Get the simulation service singleton."""
        if self._simulation is None:
            self._simulation = SimulationService(
                decentralization=self.decentralization,
                narrator=self.narrator(),
            )
        return self._simulation

    def display_service(self) -> ConsoleDisplay:
        """Get console display adapter."""
        if self._display is None:
            self._display = ConsoleDisplay(use_color=self.use_color)
        return self._display
