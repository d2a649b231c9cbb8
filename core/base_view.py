import math

from PyQt5.QtCore import QObject, QPointF, QRectF, QVariantAnimation, pyqtSignal
from PyQt5.QtWidgets import QGraphicsScene

from core.animation import AnimationToolkit

SCENE_RECT = QRectF(0, 0, 1200, 700)
FIT_PADDING = 80
CAMERA_MS = 320


class BaseStructureView(QObject):
    """
    Owns one QGraphicsScene per structure page and the animations playing on it.

    While any tracked animation runs the view reports itself locked through
    ``interactionLocked`` so the controller can disable its inputs. The
    camera (zoom and centre of the shared canvas) glides to fit the items
    after every layout.
    """

    interactionLocked = pyqtSignal(bool)

    def __init__(self, global_ctrl):
        super().__init__()
        self.anim = AnimationToolkit(global_ctrl)
        self.scene = QGraphicsScene()
        self.scene.setSceneRect(SCENE_RECT)
        self._canvas = None
        self._camera_anim = None
        self._active = []
        self._is_locked = False

    def bind_canvas(self, canvas):
        self._stop_camera()
        self._canvas = canvas
        if canvas is None:
            return
        canvas.setScene(self.scene)
        canvas.resetTransform()
        self.auto_fit_view()

    def auto_fit_view(self, padding=FIT_PADDING):
        if self._canvas is None:
            return
        bounds = self.scene.itemsBoundingRect()
        if bounds.isNull():
            target = QRectF(SCENE_RECT)
        else:
            target = bounds.adjusted(-padding, -padding, padding, padding).united(SCENE_RECT)
        self.scene.setSceneRect(target)
        self._glide_camera(target)

    # ---------- Camera ----------

    def _glide_camera(self, target: QRectF):
        viewport = self._canvas.viewport().rect()
        if viewport.isNull() or target.isNull():
            return

        from_center = self._canvas.mapToScene(viewport.center())
        from_scale = self._canvas.transform().m11()
        if not math.isfinite(from_scale) or abs(from_scale) < 1e-4:
            from_scale = 1.0
        to_center = target.center()
        # 节点很少时不放大，只在需要时缩小
        to_scale = min(viewport.width() / max(target.width(), 1.0), viewport.height() / max(target.height(), 1.0))
        to_scale = min(max(0.05, to_scale), 1.0)

        if (to_center - from_center).manhattanLength() < 1e-6 and abs(to_scale - from_scale) < 1e-6:
            return

        self._stop_camera()
        glide = QVariantAnimation(self)
        glide.setDuration(self.anim.global_ctrl.scale_duration(CAMERA_MS))
        glide.setStartValue(0.0)
        glide.setEndValue(1.0)
        glide.valueChanged.connect(
            lambda t: self._place_camera(
                from_scale + (to_scale - from_scale) * t,
                QPointF(from_center + (to_center - from_center) * t),
            )
        )
        glide.finished.connect(lambda: self._place_camera(to_scale, to_center))
        self._camera_anim = glide
        glide.start()

    def _place_camera(self, scale: float, center: QPointF):
        if self._canvas is None:
            return
        self._canvas.resetTransform()
        self._canvas.scale(scale, scale)
        self._canvas.centerOn(center)

    def _stop_camera(self):
        if self._camera_anim is not None:
            self._camera_anim.stop()
        self._camera_anim = None

    # ---------- Playback bookkeeping ----------

    def _set_locked(self, locked: bool):
        if locked != self._is_locked:
            self._is_locked = locked
            self.interactionLocked.emit(locked)

    def stop_all_animations(self):
        """Abandon playback; model state is untouched because it is never driven by animations."""
        pending, self._active = self._active, []
        for animation in pending:
            animation.stop()
        self._set_locked(False)

    def _track_animation(self, animation, finalizer=None):
        """
        Starts ``animation`` and keeps a reference until it finishes, then
        runs ``finalizer``. The view unlocks once nothing is left playing.
        """
        if animation is None:
            if finalizer:
                finalizer()
            return

        def _done():
            if animation in self._active:
                self._active.remove(animation)
            if finalizer:
                finalizer()
            if not self._active:
                self._set_locked(False)

        self._active.append(animation)
        self._set_locked(True)
        animation.finished.connect(_done)
        animation.start()
