"""MainWindow - coordinator between the login session and the screens.

One tab per screen the logged-in role may open. The window owns the
snackbar label fed by the shared notification channel; every business
decision is delegated to the presenters held by the container.
"""

from typing import Dict, Optional
import logging

from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from config.constants import (
    APP_WINDOW_TITLE,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    LOG_FILE,
    SCREEN_ANALYTICS,
    SCREEN_FORMULA_CATALOG,
    SCREEN_FORMULA_MANAGER,
    SCREEN_INPUTS,
    SCREEN_INVENTORY,
    SCREEN_PURCHASES,
    SCREEN_SALES,
    SEVERITY_ERROR,
    SEVERITY_SUCCESS,
    SEVERITY_WARNING,
)
from config.container import Container
from ui.dialogs.login_dialog import LoginDialog
from ui.presenters.notification_presenter import Notification
from ui.qt_scheduler import QtScheduler
from ui.tabs.analytics_tab import AnalyticsTab
from ui.tabs.manager_tab import ManagerTab

logging.basicConfig(
    filename=LOG_FILE,
    level=logging.DEBUG,
    format="%(asctime)s [%(threadName)s] %(levelname)s %(message)s",
)

TAB_LABELS = {
    SCREEN_ANALYTICS: "Análisis",
    SCREEN_FORMULA_MANAGER: "Gestor de fórmulas",
    SCREEN_INPUTS: "Insumos",
    SCREEN_PURCHASES: "Compras",
    SCREEN_SALES: "Ventas",
    SCREEN_INVENTORY: "Inventario",
    SCREEN_FORMULA_CATALOG: "Fórmulas",
}

SNACKBAR_COLORS = {
    SEVERITY_SUCCESS: "#2e7d32",
    SEVERITY_WARNING: "#ed6c02",
    SEVERITY_ERROR: "#d32f2f",
}


class MainWindow(QMainWindow):
    """Main application window - thin coordinator.

    Responsibilities:
    - Ask for credentials when no session is stored
    - Create one tab per allowed screen
    - Render the notification snackbar
    - Logout
    """

    def __init__(self, container: Optional[Container] = None) -> None:
        super().__init__()
        self._container = container or Container(scheduler=QtScheduler(self))
        self._tabs_by_screen: Dict[str, QWidget] = {}

        self.setWindowTitle(APP_WINDOW_TITLE)
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self._build_ui()
        self._container.notifications.subscribe(self._show_notification)

    def _build_ui(self) -> None:
        """Build the main UI structure."""
        central = QWidget(self)
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)

        header = QHBoxLayout()
        self.user_label = QLabel("")
        self.user_label.setStyleSheet("color: gray;")
        self.logout_button = QPushButton("Cerrar sesión")
        self.logout_button.clicked.connect(self.logout)
        header.addWidget(self.user_label)
        header.addStretch()
        header.addWidget(self.logout_button)
        main_layout.addLayout(header)

        self.tabs = QTabWidget()
        self.tabs.currentChanged.connect(self._on_tab_changed)
        main_layout.addWidget(self.tabs)

        # Snackbar
        self.snackbar = QLabel("")
        self.snackbar.setVisible(False)
        self.snackbar.setWordWrap(True)
        main_layout.addWidget(self.snackbar)

    def start(self) -> bool:
        """Restore or request a session, then build the screens.

        Returns:
            False when the user closed the login dialog
        """
        session = self._container.session
        session.load()
        if session.current_role() is None:
            if not LoginDialog(session, self).exec():
                return False
        self._build_tabs()
        return True

    def _clear_tabs(self) -> None:
        for tab in self._tabs_by_screen.values():
            if isinstance(tab, ManagerTab):
                tab.detach()
        self.tabs.clear()
        self._tabs_by_screen.clear()

    def _build_tabs(self) -> None:
        session = self._container.session
        self._clear_tabs()
        user = session.current_user() or {}
        self.user_label.setText(f"{user.get('nameUser', '')} ({session.current_role()})")

        dashboard = self._container.dashboard
        for screen in session.allowed_screens():
            if screen == SCREEN_ANALYTICS:
                tab: QWidget = AnalyticsTab(dashboard)
            else:
                stats = None
                if screen == SCREEN_PURCHASES:
                    stats = dashboard.purchase_cards
                elif screen == SCREEN_SALES:
                    stats = dashboard.sale_cards
                tab = ManagerTab(self._container.manager(screen), stats_cards=stats)
            self._tabs_by_screen[screen] = tab
            self.tabs.addTab(tab, TAB_LABELS.get(screen, screen))
        logging.info("Screens built for role=%s", session.current_role())

    def _on_tab_changed(self, index: int) -> None:
        # Screens of the same kind share a store; re-render on entry.
        tab = self.tabs.widget(index)
        refresh = getattr(tab, "refresh", None)
        if callable(refresh):
            refresh()

    def logout(self) -> None:
        self._container.session.clear()
        self._container.notifications.dismiss()
        self._clear_tabs()
        self.user_label.setText("")
        if LoginDialog(self._container.session, self).exec():
            self._build_tabs()
        else:
            self.close()

    def _show_notification(self, notification: Optional[Notification]) -> None:
        """Display or hide the snackbar."""
        if notification is None:
            self.snackbar.setVisible(False)
            return
        color = SNACKBAR_COLORS.get(notification.severity, "#0288d1")
        self.snackbar.setStyleSheet(
            f"background: {color}; color: white; padding: 8px; border-radius: 4px;"
        )
        self.snackbar.setText(notification.message)
        self.snackbar.setVisible(True)
        logging.debug("Snackbar: %s", notification.message)

    def closeEvent(self, event) -> None:  # noqa: N802
        self._container.notifications.dispose()
        super().closeEvent(event)
