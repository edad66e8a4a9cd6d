import math

from PyQt5.QtCore import QPointF, QRectF, Qt
from PyQt5.QtGui import QBrush, QColor, QFont, QPainterPath, QPen
from PyQt5.QtWidgets import (
    QGraphicsItem,
    QGraphicsObject,
    QGraphicsPathItem,
    QGraphicsSimpleTextItem,
)

from core.base_view import BaseStructureView
from floyd.fd_layout import CELL_WIDTH

# 链表图层整体下移，避免与数组格子重叠
NODE_LAYER_OFFSET = QPointF(0, 190)
ANNOTATION_LIFT = 45

HIGHLIGHT_FILL = "#ffd54f"
RESULT_FILL = "#a5d6a7"
VISITED_FILL = "#dcedc8"


class FloydView(BaseStructureView):
    """
    Draws one step at a time: array cells, the index graph, pointer markers,
    movement arrows and captions. Moving forward by one step glides the
    pointer markers from where they were.
    """

    def __init__(self, global_ctrl):
        super().__init__(global_ctrl)
        self.cell_items = {}
        self.node_items = {}
        self.pointer_items = {}
        self._last_step_id = None
        self._last_pointer_pos = {}

    def reset(self):
        self.stop_animations()
        self.scene.clear()
        self.cell_items.clear()
        self.node_items.clear()
        self.pointer_items.clear()
        self._last_step_id = None
        self._last_pointer_pos = {}

    def render_step(self, step, animate=True):
        previous_id = self._last_step_id
        previous_pointers = dict(self._last_pointer_pos)

        self.stop_animations()
        self.scene.clear()
        self.cell_items.clear()
        self.node_items.clear()
        self.pointer_items.clear()

        canvas = step.canvas
        self._draw_cells(canvas.array_elements)
        self._draw_nodes(canvas.nodes)
        self._draw_pointers(canvas.pointers)
        for arrow in canvas.arrows:
            self.scene.addItem(MoveArrowItem(arrow))
        self._draw_annotations(canvas.annotations)
        if canvas.found_duplicate is not None:
            self._draw_result_banner(canvas.found_duplicate)

        self._last_step_id = step.id
        self._last_pointer_pos = {
            name: QPointF(item.pos()) for name, item in self.pointer_items.items()
        }

        self.fit_to_items()
        if animate and previous_id is not None and step.id == previous_id + 1:
            self._animate_transition(previous_pointers)

    # ---------- Drawing ----------

    def _draw_cells(self, elements):
        for element in elements:
            cell = ArrayCellItem(element.index, element.value)
            cell.setPos(element.x, element.y)
            if element.is_result:
                cell.setFillColor(QColor(RESULT_FILL))
            elif element.highlighted:
                cell.setFillColor(QColor(HIGHLIGHT_FILL))
            elif element.visited:
                cell.setFillColor(QColor(VISITED_FILL))
            self.scene.addItem(cell)
            self.cell_items[element.index] = cell

            label = QGraphicsSimpleTextItem(str(element.index))
            label.setBrush(QColor("#90a4ae"))
            font = label.font()
            font.setPointSize(10)
            label.setFont(font)
            rect = label.boundingRect()
            label.setPos(
                element.x + ArrayCellItem.width / 2 - rect.width() / 2,
                element.y - rect.height() - 4,
            )
            self.scene.addItem(label)

    def _draw_nodes(self, nodes):
        for node in nodes:
            item = GraphNodeItem(node.index, node.in_cycle, node.cycle_entry)
            item.setPos(QPointF(node.x, node.y) + NODE_LAYER_OFFSET)
            if node.highlighted:
                item.setFillColor(QColor(HIGHLIGHT_FILL))
            self.scene.addItem(item)
            self.node_items[node.index] = item

        for node in nodes:
            target = self.node_items.get(node.value)
            if target is None:
                continue
            self.scene.addItem(EdgeItem(self.node_items[node.index], target))

    def _draw_pointers(self, pointers):
        stacked = {}
        for pointer in pointers:
            cell = self.cell_items.get(pointer.target_index)
            if cell is None:
                continue
            slot = stacked.get(pointer.target_index, 0)
            stacked[pointer.target_index] = slot + 1

            item = PointerItem(pointer.label, pointer.color)
            item.setPos(
                cell.pos().x() + ArrayCellItem.width / 2,
                cell.pos().y() + ArrayCellItem.height + 6 + slot * PointerItem.height,
            )
            self.scene.addItem(item)
            self.pointer_items[pointer.name] = item

    def _draw_annotations(self, annotations):
        for annotation in annotations:
            text = QGraphicsSimpleTextItem(annotation.text)
            text.setBrush(QColor(annotation.color))
            font = QFont()
            font.setPointSize(annotation.font_size)
            text.setFont(font)
            text.setPos(annotation.x - text.boundingRect().width() / 2, annotation.y - ANNOTATION_LIFT)
            text.setZValue(8)
            self.scene.addItem(text)

    def _draw_result_banner(self, duplicate):
        banner = QGraphicsSimpleTextItem(f"Duplicate: {duplicate}")
        banner.setBrush(QColor("#2e7d32"))
        font = QFont()
        font.setPointSize(18)
        font.setBold(True)
        banner.setFont(font)
        nodes_rect = QRectF()
        for item in self.node_items.values():
            nodes_rect = nodes_rect.united(item.sceneBoundingRect())
        if nodes_rect.isNull():
            banner.setPos(NODE_LAYER_OFFSET)
        else:
            banner.setPos(nodes_rect.left(), nodes_rect.bottom() + 20)
        self.scene.addItem(banner)

    # ---------- Transitions ----------

    def _animate_transition(self, previous_pointers):
        animations = []
        for name, item in self.pointer_items.items():
            start = previous_pointers.get(name)
            if start is None:
                animations.append(self.anim.fade_in(item))
            elif start != item.pos():
                animations.append(self.anim.glide(item, start, QPointF(item.pos())))

        for item in self.node_items.values():
            if item.fillColor == QColor(HIGHLIGHT_FILL):
                animations.append(
                    self.anim.pulse(item.setFillColor, item.fillColor, QColor("#ff8f00"))
                )

        if animations:
            self._track_animation(self.anim.parallel(*animations))


class ArrayCellItem(QGraphicsObject):
    width = CELL_WIDTH
    height = 40

    def __init__(self, index, value):
        super().__init__()
        self.index = index
        self._value = str(value)
        self.fillColor = QColor("#e9e9ef")
        self.strokeColor = QColor("#4a4a52")
        self.textColor = QColor("#1f1f24")
        self.setZValue(2)
        self.setCacheMode(QGraphicsItem.DeviceCoordinateCache)

    def boundingRect(self):
        return QRectF(0, 0, self.width, self.height)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)
        painter.setPen(QPen(self.strokeColor, 2))
        painter.setBrush(QBrush(self.fillColor))
        painter.drawRect(self.boundingRect())

        font = painter.font()
        font.setPointSize(13)
        painter.setFont(font)
        painter.setPen(self.textColor)
        painter.drawText(self.boundingRect(), Qt.AlignCenter, self._value)

    def setFillColor(self, color: QColor):
        self.fillColor = QColor(color)
        self.update()


class GraphNodeItem(QGraphicsObject):
    """Circle for one index; drawn around its position (the centre)."""

    radius = 25

    def __init__(self, index, in_cycle=False, cycle_entry=False):
        super().__init__()
        self.index = index
        self.fillColor = QColor("#e3f2fd" if in_cycle else "#f5f5f5")
        self.strokeColor = QColor("#FF9800" if cycle_entry else "#4a4a52")
        self._stroke_width = 3.5 if cycle_entry else 2.0
        self.setZValue(4)

    def boundingRect(self):
        r = self.radius + self._stroke_width
        return QRectF(-r, -r, 2 * r, 2 * r)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)
        painter.setPen(QPen(self.strokeColor, self._stroke_width))
        painter.setBrush(QBrush(self.fillColor))
        painter.drawEllipse(QPointF(0, 0), self.radius, self.radius)

        font = painter.font()
        font.setPointSize(12)
        painter.setFont(font)
        painter.setPen(QColor("#1f1f24"))
        rect = QRectF(-self.radius, -self.radius, 2 * self.radius, 2 * self.radius)
        painter.drawText(rect, Qt.AlignCenter, str(self.index))

    def setFillColor(self, color: QColor):
        self.fillColor = QColor(color)
        self.update()


class EdgeItem(QGraphicsPathItem):
    """Directed edge ``i -> nums[i]`` between two node circles."""

    def __init__(self, start_item: GraphNodeItem, end_item: GraphNodeItem):
        super().__init__()
        pen = QPen(QColor("#78909c"), 2)
        pen.setCapStyle(Qt.RoundCap)
        pen.setJoinStyle(Qt.RoundJoin)
        self.setPen(pen)
        self.setZValue(3)
        self._head = QPainterPath()
        self._build(start_item, end_item)

    def _build(self, start_item, end_item):
        start = start_item.pos()
        end = end_item.pos()
        radius = GraphNodeItem.radius

        if start_item is end_item:
            # 自环：在节点上方画一个小圈
            loop = QPainterPath()
            top = QPointF(start.x(), start.y() - radius)
            loop.moveTo(top + QPointF(-8, 2))
            loop.cubicTo(
                top + QPointF(-30, -45),
                top + QPointF(30, -45),
                top + QPointF(8, 2),
            )
            self.setPath(loop)
            self._head = _arrow_head(loop)
            return

        dx = end.x() - start.x()
        dy = end.y() - start.y()
        distance = max(math.hypot(dx, dy), 1e-3)
        ux, uy = dx / distance, dy / distance

        path = QPainterPath(QPointF(start.x() + ux * radius, start.y() + uy * radius))
        path.lineTo(QPointF(end.x() - ux * (radius + 4), end.y() - uy * (radius + 4)))
        self.setPath(path)
        self._head = _arrow_head(path)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing, True)
        painter.setPen(self.pen())
        painter.drawPath(self.path())
        painter.drawPath(self._head)

    def boundingRect(self):
        return super().boundingRect().united(self._head.boundingRect()).adjusted(-2, -2, 2, 2)


class MoveArrowItem(QGraphicsPathItem):
    """Curved arrow under the array showing where a pointer moved from."""

    def __init__(self, arrow):
        super().__init__()
        pen = QPen(QColor(arrow.color), 2.5)
        pen.setCapStyle(Qt.RoundCap)
        if arrow.dashed or arrow.animated:
            pen.setStyle(Qt.DashLine)
        self.setPen(pen)
        self.setZValue(6)

        start = QPointF(arrow.from_x, arrow.from_y + 40)
        end = QPointF(arrow.to_x, arrow.to_y + 40)
        horizontal = max(1.0, abs(end.x() - start.x()))
        arc = max(24.0, min(80.0, horizontal * 0.3))
        ctrl = QPointF((start.x() + end.x()) / 2.0, max(start.y(), end.y()) + arc)

        path = QPainterPath(start)
        path.quadTo(ctrl, end)
        self.setPath(path)
        self._head = _arrow_head(path, length=12)

        self._label = None
        if arrow.label:
            self._label = QGraphicsSimpleTextItem(arrow.label, self)
            self._label.setBrush(QColor(arrow.color))
            self._label.setPos(ctrl.x() - self._label.boundingRect().width() / 2, ctrl.y() - 18)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing, True)
        painter.setPen(self.pen())
        painter.drawPath(self.path())
        solid = QPen(self.pen())
        solid.setStyle(Qt.SolidLine)
        painter.setPen(solid)
        painter.drawPath(self._head)

    def boundingRect(self):
        return super().boundingRect().united(self._head.boundingRect()).adjusted(-2, -2, 2, 2)


class PointerItem(QGraphicsObject):
    """Upward triangle with a label, anchored at its tip."""

    width = 54
    height = 34

    def __init__(self, label, color):
        super().__init__()
        self._label = label
        self._color = QColor(color)
        self.setZValue(7)

    def boundingRect(self):
        return QRectF(-self.width / 2, 0, self.width, self.height)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)
        tri = QPainterPath(QPointF(0, 0))
        tri.lineTo(QPointF(-7, 10))
        tri.lineTo(QPointF(7, 10))
        tri.closeSubpath()
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(self._color))
        painter.drawPath(tri)

        font = painter.font()
        font.setPointSize(10)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(self._color)
        painter.drawText(QRectF(-self.width / 2, 10, self.width, self.height - 10), Qt.AlignCenter, self._label)


def _arrow_head(path: QPainterPath, length=10, angle_deg=26) -> QPainterPath:
    end_point = path.pointAtPercent(1.0)
    tangent = path.angleAtPercent(1.0)

    angle1 = math.radians(tangent + 180 - angle_deg)
    angle2 = math.radians(tangent + 180 + angle_deg)

    p1 = QPointF(end_point.x() + length * math.cos(angle1), end_point.y() - length * math.sin(angle1))
    p2 = QPointF(end_point.x() + length * math.cos(angle2), end_point.y() - length * math.sin(angle2))

    head = QPainterPath()
    head.moveTo(end_point)
    head.lineTo(p1)
    head.moveTo(end_point)
    head.lineTo(p2)
    return head
