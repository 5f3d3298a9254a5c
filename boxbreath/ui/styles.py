from __future__ import annotations

from PyQt6.QtWidgets import QApplication


THEME_QSS = """
QWidget {
    background: #eef6f7;
    color: #374151;
    font-size: 13px;
}

QMainWindow {
    background: #eef6f7;
}

QLabel {
    background: transparent;
}

QLabel#Heading {
    font-size: 44px;
    font-weight: 300;
    color: #334155;
}

QLabel#MutedText {
    font-size: 15px;
    color: #64748b;
}

QLabel#CountdownLabel {
    font-size: 96px;
    font-weight: 300;
    color: #475569;
}

QLabel#GuidanceLabel {
    font-size: 26px;
    font-weight: 300;
    color: #0f766e;
}

QLabel#BreathLabel {
    font-size: 15px;
    font-weight: 300;
    color: #475569;
}

QLabel#Sparkle {
    font-size: 48px;
}

QPushButton {
    border: none;
    background: #f8fafc;
    border-radius: 22px;
    padding: 10px 24px;
    min-height: 24px;
    font-size: 14px;
    font-weight: 600;
}

QPushButton:hover {
    background: #f1f5f9;
}

QPushButton:pressed {
    background: #e2e8f0;
}

QPushButton#PrimaryButton {
    background: #38b2ac;
    color: #ffffff;
}

QPushButton#PrimaryButton:hover {
    background: #319795;
}

QPushButton#PrimaryButton:pressed {
    background: #2c7a7b;
}

QPushButton#SecondaryButton {
    background: transparent;
    border: 1px solid #94a3b8;
    color: #475569;
}
"""


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)
