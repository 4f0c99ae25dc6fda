import logging
import sys

from PyQt6 import QtWidgets, QtCore, QtGui
try:
    from PyQt6.QtMultimedia import QAudio, QAudioFormat, QAudioSink, QMediaDevices
except ImportError:  # multimedia backend missing, e.g. no libpulse
    QAudio = QAudioFormat = QAudioSink = QMediaDevices = None

from pong_logic import GameState, fit_arena, GAME_OVER, PAUSED
from pong_loop import GameLoop, TICK
from pong_render import render_scene, overlay_text, BG
from pong_sound import SoundBoard, SAMPLE_RATE

log = logging.getLogger("pong.gui")


class QtCanvas:
    """Draw primitives for pong_render on top of a QPainter."""

    def __init__(self, qp, width, height):
        self.qp = qp
        self.width = width
        self.height = height

    def clear(self, color):
        self.qp.fillRect(QtCore.QRectF(0, 0, self.width, self.height), QtGui.QColor(color))

    def line(self, x0, y0, x1, y1, color, dash=None):
        pen = QtGui.QPen(QtGui.QColor(color))
        pen.setWidth(2)
        if dash:
            # dash pattern is in units of pen width
            pen.setDashPattern([d / pen.width() for d in dash])
        self.qp.setPen(pen)
        self.qp.drawLine(QtCore.QPointF(x0, y0), QtCore.QPointF(x1, y1))

    def rect(self, x, y, w, h, color):
        self.qp.fillRect(QtCore.QRectF(x, y, w, h), QtGui.QColor(color))

    def circle(self, x, y, r, color):
        c = QtGui.QColor(color)
        self.qp.setPen(c)
        self.qp.setBrush(c)
        self.qp.drawEllipse(QtCore.QPointF(x, y), r, r)

    def text(self, x, y, s, color, size, centered):
        self.qp.setPen(QtGui.QColor(color))
        self.qp.setFont(QtGui.QFont("Arial", size))
        if centered:
            box = QtCore.QRectF(0, y - size, self.width, size * 2)
            self.qp.drawText(box, QtCore.Qt.AlignmentFlag.AlignCenter, s)
        else:
            self.qp.drawText(QtCore.QPointF(x, y), s)


class QtTonePlayer:
    """Plays raw PCM clips on the default output through QAudioSink."""

    def __init__(self, parent=None):
        self.parent = parent
        self.format = QAudioFormat()
        self.format.setSampleRate(SAMPLE_RATE)
        self.format.setChannelCount(1)
        self.format.setSampleFormat(QAudioFormat.SampleFormat.Int16)
        self.playing = []

    def __call__(self, pcm):
        device = QMediaDevices.defaultAudioOutput()
        if device.isNull():
            raise RuntimeError("no audio output")

        buf = QtCore.QBuffer(self.parent)
        buf.setData(QtCore.QByteArray(pcm))
        buf.open(QtCore.QIODevice.OpenModeFlag.ReadOnly)
        sink = QAudioSink(device, self.format, self.parent)
        pair = (sink, buf)
        sink.stateChanged.connect(lambda st, pair=pair: self.on_state(pair, st))
        self.playing.append(pair)
        sink.start(buf)

    def on_state(self, pair, st):
        if st in (QAudio.State.IdleState, QAudio.State.StoppedState):
            sink, buf = pair
            if pair in self.playing:
                self.playing.remove(pair)
                sink.stop()
                buf.close()
                sink.deleteLater()
                buf.deleteLater()


class GameWidget(QtWidgets.QWidget):
    def __init__(self, loop):
        super().__init__()
        self.loop = loop
        self.setMinimumSize(200, 100)
        self.setMouseTracking(True)
        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QtWidgets.QSizePolicy.Policy.Expanding, QtWidgets.QSizePolicy.Policy.Expanding)

    def origin(self):
        st = self.loop.state
        return (self.width() - st.width) / 2, (self.height() - st.height) / 2

    def paintEvent(self, event):
        qp = QtGui.QPainter(self)
        qp.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        qp.fillRect(self.rect(), QtGui.QColor(BG).darker(140))

        st = self.loop.state
        ox, oy = self.origin()
        qp.translate(ox, oy)
        qp.setClipRect(QtCore.QRectF(0, 0, st.width, st.height))
        render_scene(st, QtCanvas(qp, st.width, st.height))
        qp.end()

    def resizeEvent(self, event):
        size = event.size()
        w, h = fit_arena(min(size.width(), size.height() * 2))
        self.loop.resize(w, h)
        self.update()
        super().resizeEvent(event)

    def pointer(self, y):
        self.loop.set_player_paddle_center(y - self.origin()[1])
        # no frames while paused, repaint here
        self.update()

    def mouseMoveEvent(self, e):
        self.pointer(e.position().y())

    def event(self, e):
        if e.type() in (QtCore.QEvent.Type.TouchBegin, QtCore.QEvent.Type.TouchUpdate):
            points = e.points()
            if points:
                self.pointer(points[0].position().y())
            e.accept()
            return True
        return super().event(e)


class MainWindow(QtWidgets.QWidget):
    def __init__(self, loop=None, sound=True):
        super().__init__()
        if loop is None:
            if sound and QAudioSink is None:
                log.info("sound off # QtMultimedia unavailable")
            board = SoundBoard(QtTonePlayer(self) if sound and QAudioSink is not None else None)
            loop = GameLoop(GameState(), sound=board)
        self.loop = loop
        self.loop.render = lambda state: self.game_widget.update()

        self.timer = QtCore.QTimer(self)
        self.timer.setInterval(int(TICK * 1000))
        self.timer.timeout.connect(self.on_frame)

        self.init_ui()
        self.resize(840, 500)

        self.setStyleSheet("""
            QWidget {
                background-color: #ffe6f2;
                color: #333;
                font-size: 14px;
            }

            QPushButton {
                background-color: #ffb3d9;
                border: none;
                border-radius: 6px;
                padding: 8px 14px;
                color: white;
                font-weight: bold;
            }

            QPushButton:hover {
                background-color: #ff99cc;
            }

            QPushButton:pressed {
                background-color: #ff80bf;
            }

            QLabel {
                font-weight: bold;
            }
        """)

        self.loop.start()
        self.sync()

    def init_ui(self):
        self.setWindowTitle("PONG")

        main_layout = QtWidgets.QVBoxLayout(self)
        self.game_widget = GameWidget(self.loop)
        main_layout.addWidget(self.game_widget, 1)

        row = QtWidgets.QHBoxLayout()
        self.status = QtWidgets.QLabel("")
        self.btn_pause = QtWidgets.QPushButton("Pause")
        self.btn_restart = QtWidgets.QPushButton("Restart")
        row.addWidget(self.status, 1)
        row.addWidget(self.btn_pause)
        row.addWidget(self.btn_restart)
        main_layout.addLayout(row)

        for btn in (self.btn_pause, self.btn_restart):
            btn.setFocusPolicy(QtCore.Qt.FocusPolicy.NoFocus)
        self.btn_pause.clicked.connect(self.on_pause)
        self.btn_restart.clicked.connect(self.on_restart)

    def sync(self):
        """Reflect the match state on the buttons and reschedule frames."""
        st = self.loop.state
        self.btn_pause.setText("Resume" if st.mode == PAUSED else "Pause")
        self.btn_pause.setEnabled(st.mode != GAME_OVER)
        self.status.setText(overlay_text(st) or f"First to {st.win_score}")

        if self.loop.running and not self.timer.isActive():
            self.timer.start()
        elif not self.loop.running and self.timer.isActive():
            self.timer.stop()
        self.game_widget.update()

    def on_frame(self):
        if not self.loop.frame():
            self.sync()

    def on_pause(self):
        self.loop.toggle_pause()
        self.sync()

    def on_restart(self):
        self.loop.restart()
        self.sync()

    def on_mute(self):
        sound = self.loop.sound
        if sound is None:
            return
        sound.set_muted(not sound.muted)
        log.info("sound %s", "off" if sound.muted else "on")

    def keyPressEvent(self, e):
        k = e.key()
        if k in (QtCore.Qt.Key.Key_P, QtCore.Qt.Key.Key_Space):
            self.on_pause()
        elif k == QtCore.Qt.Key.Key_R:
            self.on_restart()
        elif k == QtCore.Qt.Key.Key_M:
            self.on_mute()
        elif k == QtCore.Qt.Key.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(e)

    def closeEvent(self, e):
        self.timer.stop()
        self.loop.stop()
        log.info("closed after %d frames", self.loop.frames)
        e.accept()


def main():
    logging.basicConfig(level=logging.INFO, format="[%(name)s] %(message)s")
    app = QtWidgets.QApplication(sys.argv)
    w = MainWindow()
    w.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
