from PyQt5.QtCore import (
    QEasingCurve,
    QParallelAnimationGroup,
    QPropertyAnimation,
    QVariantAnimation,
)
from PyQt5.QtGui import QColor


class AnimationToolkit:
    """
    Builds the short transitions played between two steps. Every duration
    goes through the global speed multiplier.
    """

    def __init__(self, global_ctrl):
        self.global_ctrl = global_ctrl

    def _duration(self, base_ms):
        return self.global_ctrl.scale_duration(base_ms)

    def glide(self, item, start_pos, end_pos, duration=420):
        anim = QPropertyAnimation(item, b"pos")
        anim.setDuration(self._duration(duration))
        anim.setStartValue(start_pos)
        anim.setEndValue(end_pos)
        anim.setEasingCurve(QEasingCurve.InOutCubic)
        return anim

    def fade_in(self, item, duration=300):
        anim = QPropertyAnimation(item, b"opacity")
        anim.setDuration(self._duration(duration))
        anim.setStartValue(0.0)
        anim.setEndValue(1.0)
        anim.setEasingCurve(QEasingCurve.InOutQuad)
        return anim

    def pulse(self, setter, base_color, flash_color, duration=360):
        """
        setter: callable receiving QColor (e.g. node.setFillColor).
        Goes base → flash → base once.
        """
        anim = QVariantAnimation()
        anim.setDuration(self._duration(duration))
        anim.setStartValue(QColor(base_color))
        anim.setKeyValueAt(0.5, QColor(flash_color))
        anim.setEndValue(QColor(base_color))

        def _update(value):
            if isinstance(value, QColor):
                setter(value)

        anim.valueChanged.connect(_update)
        return anim

    @staticmethod
    def parallel(*animations):
        group = QParallelAnimationGroup()
        for anim in animations:
            if anim:
                group.addAnimation(anim)
        return group
