import logging

from PyQt5.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)

MIN_SPEED = 0.5
MAX_SPEED = 3.0


class GlobalController(QObject):
    """
    Playback settings shared by every structure page.

    The speed is a multiplier: 2.0x halves every animation duration. At
    ``MAX_SPEED`` the step-by-step replay (search paths, heap swaps) is
    skipped and only the final layout is animated.
    """

    speedChanged = pyqtSignal(float)

    def __init__(self, speed: float = 1.0):
        super().__init__()
        self._speed = self._clamp(speed)

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def skip_steps(self) -> bool:
        return self._speed >= MAX_SPEED

    def set_speed(self, value: float):
        value = self._clamp(value)
        if abs(value - self._speed) > 1e-3:
            self._speed = value
            logger.debug("playback speed set to %.1fx", value)
            self.speedChanged.emit(self._speed)

    def scale_duration(self, base_ms: int) -> int:
        return max(1, int(base_ms / self._speed))

    @staticmethod
    def _clamp(value: float) -> float:
        return max(MIN_SPEED, min(MAX_SPEED, float(value)))
