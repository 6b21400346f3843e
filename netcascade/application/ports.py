"""
Outbound Ports

Interfaces the simulation service notifies while it applies waves. Anything
with side effects (terminal output, sound, animation) lives behind these
ports; the propagation core never calls them.
"""

from abc import ABC, abstractmethod

from netcascade.domain.models import CascadeRun, Metrics, Wave


class ICascadeObserver(ABC):
    """Receives progress of an orchestrated cascade run."""

    @abstractmethod
    def on_wave_applied(self, wave_index: int, wave: Wave, metrics: Metrics) -> None:
        """
        Called after a wave has been applied to the live snapshot.

        Args:
            wave_index: Zero-based wave index
            wave: The status changes just applied
            metrics: Metrics of the snapshot after the wave
        """
        pass

    @abstractmethod
    def on_run_complete(self, run: CascadeRun) -> None:
        pass

