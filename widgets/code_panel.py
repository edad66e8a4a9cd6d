from PyQt5.QtCore import pyqtSignal
from PyQt5.QtGui import QColor, QFont, QTextCursor, QTextFormat
from PyQt5.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from floyd.fd_code import ALGORITHM_CODE, LANGUAGE_LABELS
from floyd.fd_model import LANGUAGES


class CodePanel(QWidget):
    """
    Read-only listing of the algorithm in the selected language with the
    current step's lines highlighted and its variables shown underneath.
    """

    languageChanged = pyqtSignal(str)

    def __init__(self, language="python", parent=None):
        super().__init__(parent)
        self._language = language if language in LANGUAGES else "python"
        self._step = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        header = QHBoxLayout()
        header.addWidget(QLabel("Code"))
        self.language_combo = QComboBox()
        for lang in LANGUAGES:
            self.language_combo.addItem(LANGUAGE_LABELS[lang], lang)
        self.language_combo.setCurrentIndex(LANGUAGES.index(self._language))
        self.language_combo.currentIndexChanged.connect(self._on_language_index)
        header.addWidget(self.language_combo, 1)
        layout.addLayout(header)

        self.editor = QTextEdit()
        self.editor.setReadOnly(True)
        self.editor.setLineWrapMode(QTextEdit.NoWrap)
        mono = QFont("Monospace")
        mono.setStyleHint(QFont.TypeWriter)
        mono.setPointSize(11)
        self.editor.setFont(mono)
        layout.addWidget(self.editor, 1)

        self.variables_label = QLabel()
        self.variables_label.setObjectName("variablesLabel")
        self.variables_label.setWordWrap(True)
        layout.addWidget(self.variables_label)

        self._load_code()

    @property
    def language(self):
        return self._language

    def set_language(self, language):
        if language not in LANGUAGES or language == self._language:
            return
        self.language_combo.setCurrentIndex(LANGUAGES.index(language))

    def show_step(self, step):
        self._step = step
        self._apply_highlight()

    def _on_language_index(self, idx):
        self._language = self.language_combo.itemData(idx)
        self._load_code()
        self.languageChanged.emit(self._language)

    def _load_code(self):
        lines = ALGORITHM_CODE[self._language].splitlines()
        width = len(str(len(lines)))
        numbered = "\n".join(f"{n:>{width}}  {text}" for n, text in enumerate(lines, start=1))
        self.editor.setPlainText(numbered)
        self._apply_highlight()

    def _apply_highlight(self):
        if self._step is None:
            self.editor.setExtraSelections([])
            self.variables_label.clear()
            return

        selections = []
        document = self.editor.document()
        for line in self._step.lines_for(self._language):
            block = document.findBlockByLineNumber(line - 1)
            if not block.isValid():
                continue
            selection = QTextEdit.ExtraSelection()
            selection.format.setBackground(QColor("#fff59d"))
            selection.format.setProperty(QTextFormat.FullWidthSelection, True)
            selection.cursor = QTextCursor(block)
            selections.append(selection)
        self.editor.setExtraSelections(selections)

        self.variables_label.setText(
            "   ".join(f"{var.name} = {var.value}" for var in self._step.variables)
        )
