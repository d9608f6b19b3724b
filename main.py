import argparse
import logging
import sys

from PyQt5.QtWidgets import (QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                             QLabel, QPushButton, QGridLayout, QScrollArea, QMessageBox)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont

from morse_table import MORSE_CODE, TARGET_WORDS, reference_entries
from playback import MorsePlayer
from settings import ConfigurationError, configure_logging, load_settings
from trainer import MorseTrainer, QtPendingTimeout

logger = logging.getLogger(__name__)


class ReferenceWindow(QWidget):
    def __init__(self, player, table, parent=None):
        super().__init__(parent, Qt.Window)
        self.setWindowTitle("Morse Reference")
        self.resize(400, 600)

        panel = QWidget()
        grid = QGridLayout(panel)
        for row, (char, code) in enumerate(reference_entries(table)):
            grid.addWidget(QLabel(char), row, 0)
            grid.addWidget(QLabel(code), row, 1)
            play_button = QPushButton("Play")
            play_button.clicked.connect(lambda _, code=code: player.play_sequence(code))
            grid.addWidget(play_button, row, 2)

        scroll_area = QScrollArea()
        scroll_area.setWidget(panel)
        scroll_area.setWidgetResizable(True)

        layout = QVBoxLayout(self)
        layout.addWidget(scroll_area)


class MorseTrainerWindow(QMainWindow):
    def __init__(self, settings, player):
        super().__init__()
        self.setWindowTitle("Morse Code Trainer")
        self.setMinimumSize(600, 400)

        self.player = player
        self.trainer = MorseTrainer(
            MORSE_CODE,
            TARGET_WORDS,
            timeout=QtPendingTimeout(settings.character_timeout, self),
            player=player,
            on_change=self.update_display,
            settings=settings,
        )
        self.reference_window = None

        # Keys held down; auto-repeat must not key extra symbols
        self.space_pressed = False
        self.shift_pressed = False

        self.setup_ui()
        self.update_display()

    def setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)

        self.current_label = self.create_label()
        self.translated_label = self.create_label()
        self.target_label = self.create_label()
        main_layout.addWidget(self.current_label)
        main_layout.addWidget(self.translated_label)
        main_layout.addWidget(self.target_label)

        help_label = QLabel("Space = dot, Shift = dash, Enter = finish character")
        help_label.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(help_label)

        button_layout = QHBoxLayout()
        reference_button = self.create_button("Show Reference", self.show_reference_sheet)
        new_target_button = self.create_button("New Target", self.reset_training)
        button_layout.addWidget(reference_button)
        button_layout.addWidget(new_target_button)
        main_layout.addLayout(button_layout)

        self.setFocusPolicy(Qt.StrongFocus)
        self.setFocus()

    def create_label(self):
        label = QLabel()
        label.setFont(QFont("Monospace", 24, QFont.Bold))
        return label

    def create_button(self, text, action):
        button = QPushButton(text)
        button.clicked.connect(action)
        # Space would otherwise press the focused button
        button.setFocusPolicy(Qt.NoFocus)
        return button

    def update_display(self):
        self.current_label.setText("Current: " + self.trainer.get_current_code())
        self.translated_label.setText("Translated: " + self.trainer.get_translated())
        self.target_label.setText("Target: " + self.trainer.get_target_word())
        self.translated_label.setStyleSheet("color: green;" if self.trainer.is_complete() else "")

    def show_reference_sheet(self):
        if self.reference_window is None:
            self.reference_window = ReferenceWindow(self.player, self.trainer.table, self)
        self.reference_window.show()
        self.reference_window.raise_()

    def reset_training(self):
        self.trainer.reset()
        self.setFocus()

    def keyPressEvent(self, event):
        if event.isAutoRepeat():
            return
        key = event.key()
        if key == Qt.Key_Space and not self.space_pressed:
            self.space_pressed = True
            self.trainer.add_symbol('.')
        elif key == Qt.Key_Shift and not self.shift_pressed:
            self.shift_pressed = True
            self.trainer.add_symbol('-')
        elif key in (Qt.Key_Return, Qt.Key_Enter):
            self.trainer.finalize_character()
        else:
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.isAutoRepeat():
            return
        if event.key() == Qt.Key_Space:
            self.space_pressed = False
        elif event.key() == Qt.Key_Shift:
            self.shift_pressed = False
        else:
            super().keyReleaseEvent(event)

    def closeEvent(self, event):
        self.trainer.timeout.cancel()
        self.player.shutdown()
        super().closeEvent(event)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Learn Morse code by keying it in.")
    parser.add_argument("--config", help="JSON file overriding timing and audio settings")
    parser.add_argument("--verbose", action="store_true", help="log every keyed symbol")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.verbose)

    # Create and run the application
    app = QApplication(sys.argv[:1])
    try:
        settings = load_settings(args.config).validate()
    except ConfigurationError as e:
        logger.error(str(e))
        QMessageBox.critical(None, "Morse Code Trainer", str(e))
        return 1

    player = MorsePlayer(settings).start()
    window = MorseTrainerWindow(settings, player)
    window.show()
    try:
        return app.exec_()
    finally:
        player.shutdown()


if __name__ == "__main__":
    sys.exit(main())
