from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
import re

from loguru import logger

from golftour.db.repositories import SqliteStandingsRepository
from golftour.services.export_service import StandingsExportService
from golftour.services.standings import StandingsService
from golftour.settings import get_export_directory


@dataclass
class BatchExportResult:
    run_directory: Path
    files_created: list[Path]


class BatchStandingsExportService:
    def __init__(self, repository: SqliteStandingsRepository) -> None:
        self._repository = repository
        self._standings_service = StandingsService(repository)
        self._export_service = StandingsExportService()

    def export_all(self, base_directory: str | Path | None = None) -> BatchExportResult:
        base = Path(base_directory) if base_directory is not None else get_export_directory()
        run_directory = base / f"{date.today().isoformat()}_run"
        run_directory.mkdir(parents=True, exist_ok=True)

        files_created: list[Path] = []
        for tour_id in self._repository.list_tour_ids():
            standings = self._standings_service.get_full_standings(tour_id)
            tour_slug = f"{self._slug(standings.tour.name)}_{tour_id}"
            target_path = run_directory / f"standings_{tour_slug}.xlsx"
            files_created.append(self._export_service.export_standings_xlsx(target_path, standings))

            for category in standings.categories:
                category_standings = self._standings_service.get_full_standings(
                    tour_id, category_id=category.id
                )
                target_path = run_directory / f"standings_{tour_slug}_{self._slug(category.name)}.xlsx"
                files_created.append(
                    self._export_service.export_standings_xlsx(target_path, category_standings)
                )

        logger.info("Batch export wrote {} files to {}", len(files_created), run_directory)
        return BatchExportResult(run_directory=run_directory, files_created=files_created)

    @staticmethod
    def _slug(value: str) -> str:
        normalized = re.sub(r"[^\w\-]+", "_", value.strip().lower())
        return normalized.strip("_") or "item"
