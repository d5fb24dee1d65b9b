from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterable, Sequence

from loguru import logger
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from golftour.services.standings import TourStandings

BASE_COLUMNS = ["Position", "Player", "Points", "Played"]


class StandingsExportService:
    def export_standings_xlsx(self, path: str | Path, standings: TourStandings) -> Path:
        columns, rows = self.build_standings_table(standings)
        self.export_dataset_xlsx(str(path), self.build_header_lines(standings), columns, rows)
        logger.info(
            "Exported standings for tour {} to {}", standings.tour.id, path
        )
        return Path(path)

    def build_header_lines(self, standings: TourStandings) -> list[str]:
        lines = [
            standings.tour.name,
            f"Date: {self.format_date_label()}",
            f"Scoring: {standings.selected_scoring_type}",
        ]
        if standings.point_template is not None:
            lines.append(f"Point template: {standings.point_template['name']}")
        if standings.selected_category_id is not None:
            category = next(
                (c for c in standings.categories if c.id == standings.selected_category_id),
                None,
            )
            if category is not None:
                lines.append(f"Category: {category.name}")
        return lines

    @staticmethod
    def build_standings_table(standings: TourStandings) -> tuple[list[str], list[list[object]]]:
        competitions: dict[int, tuple[str, str]] = {}
        for standing in standings.player_standings:
            for result in standing.competitions:
                competitions.setdefault(
                    result.competition_id,
                    (result.competition_date, result.competition_name),
                )
        competition_ids = sorted(
            competitions, key=lambda competition_id: (competitions[competition_id], competition_id)
        )
        columns = BASE_COLUMNS + [
            f"{competitions[competition_id][1]} ({competitions[competition_id][0]})"
            for competition_id in competition_ids
        ]

        rows: list[list[object]] = []
        for standing in standings.player_standings:
            points_by_competition = {
                result.competition_id: result.points for result in standing.competitions
            }
            rows.append(
                [
                    standing.position,
                    standing.player_name,
                    standing.total_points,
                    standing.competitions_played,
                    *[points_by_competition.get(competition_id) for competition_id in competition_ids],
                ]
            )
        return columns, rows

    def export_dataset_xlsx(
        self,
        path: str,
        header_lines: Iterable[str],
        columns: Sequence[str],
        rows: Sequence[Sequence[object]],
    ) -> None:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Standings"

        current_row = 1
        for line in header_lines:
            sheet.cell(row=current_row, column=1, value=line)
            current_row += 1

        header_row = current_row
        header_fill = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
        for column, header_text in enumerate(columns, start=1):
            cell = sheet.cell(row=header_row, column=column, value=header_text)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.fill = header_fill

        current_row += 1
        alignment = Alignment(horizontal="left", vertical="top", wrap_text=True)
        for row in rows:
            for column, value in enumerate(row, start=1):
                cell = sheet.cell(row=current_row, column=column, value=value)
                cell.alignment = alignment
            current_row += 1

        sheet.freeze_panes = f"A{header_row + 1}"

        for column_index in range(1, len(columns) + 1):
            max_length = len(str(columns[column_index - 1]))
            for row_index in range(header_row + 1, current_row):
                value = sheet.cell(row=row_index, column=column_index).value
                if value is None:
                    continue
                max_length = max(max_length, len(str(value)))
            sheet.column_dimensions[get_column_letter(column_index)].width = min(max_length + 2, 60)

        sheet.page_setup.orientation = "landscape"
        sheet.page_setup.fitToWidth = 1
        sheet.page_setup.fitToHeight = 0
        workbook.save(path)

    @staticmethod
    def format_date_label() -> str:
        return date.today().isoformat()
