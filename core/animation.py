from PyQt5.QtCore import (
    QAbstractAnimation,
    QEasingCurve,
    QParallelAnimationGroup,
    QPropertyAnimation,
    QSequentialAnimationGroup,
    QVariantAnimation,
)


class AnimationToolkit:
    """
    Builds Qt animations whose durations follow the global playback speed.
    Every factory returns an unstarted animation; callers group and start them.
    """

    MOVE_MS = 520
    FADE_MS = 360
    STEP_MS = 600

    def __init__(self, global_ctrl):
        self.global_ctrl = global_ctrl

    def _property(self, item, name: bytes, duration, easing):
        anim = QPropertyAnimation(item, name)
        anim.setDuration(self.global_ctrl.scale_duration(duration))
        anim.setEasingCurve(easing)
        return anim

    def move_item(self, item, end_pos, duration=MOVE_MS):
        anim = self._property(item, b"pos", duration, QEasingCurve.InOutCubic)
        anim.setEndValue(end_pos)
        return anim

    def fade_item(self, item, start=0.0, end=1.0, duration=FADE_MS):
        anim = self._property(item, b"opacity", duration, QEasingCurve.InOutQuad)
        anim.setStartValue(start)
        anim.setEndValue(end)
        return anim

    def hold(self, on_start=None, duration=STEP_MS):
        """
        A timed no-op used as one playback step; ``on_start`` fires when the
        step begins (highlight nodes, update the caption).
        """
        step = QVariantAnimation()
        step.setDuration(self.global_ctrl.scale_duration(duration))
        step.setStartValue(0)
        step.setEndValue(1)
        if on_start is not None:
            step.stateChanged.connect(
                lambda new_state, _old: on_start() if new_state == QAbstractAnimation.Running else None
            )
        return step

    @staticmethod
    def parallel(*animations):
        return _grouped(QParallelAnimationGroup(), animations)

    @staticmethod
    def sequential(*animations):
        return _grouped(QSequentialAnimationGroup(), animations)


def _grouped(group, animations):
    for anim in animations:
        if anim is not None:
            group.addAnimation(anim)
    return group
