from dataclasses import dataclass

from core.global_ctrl import MAX_SPEED, MIN_SPEED

BASE_INTERVAL_MS = 1500


@dataclass
class PlaybackState:
    """
    Position of the playback cursor over a precomputed step sequence.
    Holds no timer itself; the controller's QTimer only has to call ``tick``.
    """

    total_steps: int = 0
    current_step: int = 0
    playing: bool = False
    speed: float = 1.0

    @property
    def at_end(self) -> bool:
        return self.total_steps == 0 or self.current_step >= self.total_steps - 1

    @property
    def at_start(self) -> bool:
        return self.current_step <= 0

    @property
    def interval_ms(self) -> int:
        return max(1, int(BASE_INTERVAL_MS / self.speed))

    def load(self, total_steps: int):
        self.total_steps = max(0, total_steps)
        self.current_step = 0
        self.playing = False

    def set_speed(self, speed: float):
        self.speed = max(MIN_SPEED, min(MAX_SPEED, float(speed)))

    def next(self) -> bool:
        if self.at_end:
            return False
        self.current_step += 1
        return True

    def prev(self) -> bool:
        if self.at_start:
            return False
        self.current_step -= 1
        return True

    def reset(self):
        self.current_step = 0
        self.playing = False

    def seek(self, step: int):
        if step < 0 or step >= self.total_steps:
            raise IndexError("Step out of range")
        self.current_step = step

    def play(self) -> bool:
        if self.total_steps == 0:
            return False
        # 已到末尾时从头播放
        if self.at_end:
            self.current_step = 0
        self.playing = True
        return True

    def pause(self):
        self.playing = False

    def toggle(self) -> bool:
        if self.playing:
            self.pause()
        else:
            self.play()
        return self.playing

    def tick(self) -> bool:
        """Advance one step while playing; stops at the last step."""
        if not self.playing:
            return False
        if not self.next():
            self.playing = False
            return False
        if self.at_end:
            self.playing = False
        return True
