from PyQt5.QtCore import QObject, QRectF, Qt, pyqtSignal
from PyQt5.QtWidgets import QGraphicsScene

from core.animation import AnimationToolkit


class BaseStructureView(QObject):
    """
    Base class for step renderers, providing:
    - a QGraphicsScene bound to whichever canvas is active
    - the animation helper and tracking of running transitions
    - fitting the canvas to the drawn items
    """

    animationRunning = pyqtSignal(bool)

    def __init__(self, global_ctrl):
        super().__init__()
        self.scene = QGraphicsScene()
        self.scene.setSceneRect(-100, -100, 1000, 600)
        self.anim = AnimationToolkit(global_ctrl)
        self._running = []
        self._canvas = None
        self._base_scene_rect = QRectF(self.scene.sceneRect())

    def bind_canvas(self, view):
        self._canvas = view
        if view:
            view.setScene(self.scene)
            view.resetTransform()

    def fit_to_items(self, padding=60):
        if not self._canvas:
            return

        items_rect = self.scene.itemsBoundingRect()
        if items_rect.isNull():
            target = QRectF(self._base_scene_rect)
        else:
            target = QRectF(items_rect)
            target.adjust(-padding, -padding, padding, padding)
        self.scene.setSceneRect(target)

        viewport = self._canvas.viewport().rect()
        if viewport.isNull():
            return

        self._canvas.resetTransform()
        if target.width() > viewport.width() or target.height() > viewport.height():
            self._canvas.fitInView(target, Qt.KeepAspectRatio)
        else:
            self._canvas.centerOn(target.center())

    def stop_animations(self):
        for animation in list(self._running):
            animation.stop()
        self._running.clear()
        self.animationRunning.emit(False)

    def _track_animation(self, animation):
        """Keeps a reference until the animation finishes so it is not collected."""
        if animation is None:
            return

        self._running.append(animation)
        self.animationRunning.emit(True)

        def _cleanup():
            if animation in self._running:
                self._running.remove(animation)
            if not self._running:
                self.animationRunning.emit(False)

        animation.finished.connect(_cleanup)
        animation.start()
