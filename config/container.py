"""Dependency Injection container.

Provides centralized dependency management for the application.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from application.session import Session
from application.use_cases import (
    BuildAnalyticsUseCase,
    ExportTableUseCase,
    LoadFixtureUseCase,
)
from config.constants import (
    ENV_FIXTURES_DIR,
    ENV_SESSION_FILE,
    FIXTURES_DIRECTORY,
    SESSION_FILE,
)
from infrastructure.persistence.excel_exporter import ExcelExporter
from infrastructure.persistence.json_repository import JSONFixtureRepository
from infrastructure.persistence.memory_repository import CollectionStore
from infrastructure.reporting.analytics import AnalyticsReport
from infrastructure.scheduling.scheduler import ManualScheduler, Scheduler
from infrastructure.session.storage import JSONFileStorage, KeyValueStorage
from ui.presenters.dashboard_presenter import DashboardPresenter
from ui.presenters.manager_presenter import ManagerPresenter
from ui.presenters.notification_presenter import NotificationChannel
from ui.presenters.screens import MANAGER_SCREENS

load_dotenv()

ENTITY_KINDS = ("input", "product", "purchase", "sale", "formula")


class Container:
    """Dependency injection container.

    Provides singleton instances of stores, services and presenters.
    Every manager screen of the same kind shares one store, so the
    formula manager and the read-only catalog see the same records.
    """

    def __init__(
        self,
        fixtures_dir: Optional[str | Path] = None,
        storage: Optional[KeyValueStorage] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        """Initialize container.

        Args:
            fixtures_dir: Fixture directory (if None, reads from environment)
            storage: Session storage (if None, uses a JSON file)
            scheduler: Timer source (if None, uses ManualScheduler)
        """
        self._fixtures_dir = Path(
            fixtures_dir or os.getenv(ENV_FIXTURES_DIR) or FIXTURES_DIRECTORY
        )
        self._storage = storage
        self._scheduler = scheduler if scheduler is not None else ManualScheduler()

        # Lazy-initialized singletons
        self._fixture_repository: Optional[JSONFixtureRepository] = None
        self._excel_exporter: Optional[ExcelExporter] = None
        self._stores: Dict[str, CollectionStore] = {}
        self._session: Optional[Session] = None
        self._notifications: Optional[NotificationChannel] = None
        self._export_table_use_case: Optional[ExportTableUseCase] = None
        self._managers: Dict[str, ManagerPresenter] = {}
        self._dashboard: Optional[DashboardPresenter] = None

    # Infrastructure
    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def fixture_repository(self) -> JSONFixtureRepository:
        """Get JSON fixture repository."""
        if self._fixture_repository is None:
            self._fixture_repository = JSONFixtureRepository(
                base_directory=self._fixtures_dir
            )
        return self._fixture_repository

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    @property
    def storage(self) -> KeyValueStorage:
        """Get durable session storage."""
        if self._storage is None:
            self._storage = JSONFileStorage(os.getenv(ENV_SESSION_FILE) or SESSION_FILE)
        return self._storage

    def store(self, kind: str) -> CollectionStore:
        """Get the store of one entity kind, seeded from its fixture."""
        if kind not in ENTITY_KINDS:
            raise ValueError(f"Unknown entity kind: {kind}")
        if kind not in self._stores:
            self._stores[kind] = LoadFixtureUseCase(self.fixture_repository).execute(kind)
        return self._stores[kind]

    # Application
    @property
    def session(self) -> Session:
        """Get login session."""
        if self._session is None:
            self._session = Session(
                storage=self.storage,
                users=self.fixture_repository.load_users(),
            )
        return self._session

    @property
    def notifications(self) -> NotificationChannel:
        """Get the shared notification channel."""
        if self._notifications is None:
            self._notifications = NotificationChannel(self._scheduler)
        return self._notifications

    @property
    def export_table(self) -> ExportTableUseCase:
        """Get export table use case."""
        if self._export_table_use_case is None:
            self._export_table_use_case = ExportTableUseCase(self.excel_exporter)
        return self._export_table_use_case

    # Presenters
    def manager(self, screen: str) -> ManagerPresenter:
        """Get the manager presenter of one screen."""
        if screen not in self._managers:
            config = MANAGER_SCREENS.get(screen)
            if config is None:
                raise ValueError(f"Unknown manager screen: {screen}")
            self._managers[screen] = ManagerPresenter(
                config=config,
                store=self.store(config.kind),
                notifications=self.notifications,
                export_table=self.export_table,
            )
        return self._managers[screen]

    @property
    def dashboard(self) -> DashboardPresenter:
        """Get stats/analytics presenter."""
        if self._dashboard is None:
            self._dashboard = DashboardPresenter(
                stores={kind: self.store(kind) for kind in ENTITY_KINDS},
                analytics=BuildAnalyticsUseCase(AnalyticsReport()),
            )
        return self._dashboard
