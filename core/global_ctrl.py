from PyQt5.QtCore import QObject, pyqtSignal

MIN_SPEED = 0.5
MAX_SPEED = 3.0


class GlobalController(QObject):
    """
    Holds the playback speed multiplier shared by the step timer and every
    pointer animation, and broadcasts changes.
    """

    speedChanged = pyqtSignal(float)

    def __init__(self, speed: float = 1.0):
        super().__init__()
        self._speed = self._clamp(speed)

    @property
    def speed(self) -> float:
        return self._speed

    @staticmethod
    def _clamp(value: float) -> float:
        return max(MIN_SPEED, min(MAX_SPEED, float(value)))

    def set_speed(self, value: float):
        value = self._clamp(value)
        if abs(value - self._speed) > 1e-3:
            self._speed = value
            self.speedChanged.emit(self._speed)

    def scale_duration(self, base_ms: int) -> int:
        """Higher speed → shorter duration, never below 1 ms."""
        return max(1, int(base_ms / self._speed))
