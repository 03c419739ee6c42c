"""Main CLI interface for MRONJ Screening."""

import sys
import argparse
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mronj_screening.config.settings import (
    LOG_FORMAT,
    LOG_LEVEL,
    OUTPUT_LANGUAGE,
    SUPPORTED_LANGUAGES,
)
from mronj_screening.core.errors import ScreeningError
from mronj_screening.models.assessment import RiskLevel, ScreeningResult
from mronj_screening.services.screening_service import ScreeningService

# Setup logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


RISK_STYLES = {
    RiskLevel.HIGH: "bold red",
    RiskLevel.MODERATE: "bold yellow",
    RiskLevel.LOW: "bold green",
}

RISK_EMOJI = {
    RiskLevel.HIGH: "🔴",
    RiskLevel.MODERATE: "🟠",
    RiskLevel.LOW: "🟢",
}

UI_TEXT = {
    "zh-TW": {
        "title": "MRONJ風險評估報告",
        "patient": "基本資料",
        "name": "姓名",
        "birth": "生日",
        "id": "身分證字號",
        "assessed_on": "評估日期",
        "history": "病史資料",
        "diseases": "全身性疾病",
        "radiotherapy": "放射治療病史",
        "cancer": "腫瘤病史",
        "bmi": "BMI",
        "medication": "用藥紀錄",
        "drug": "藥物名稱",
        "route": "使用方式",
        "indication": "使用原因",
        "start": "開始時間",
        "frequency": "使用頻率",
        "stop": "停藥時間",
        "ongoing": "目前持續使用中",
        "no_medication": "無使用相關藥物",
        "exposure": "用藥期間",
        "months": "個月",
        "results": "風險評估結果",
        "procedure": "治療項目",
        "risk": "風險程度",
        "recommendation": "建議",
        "overall": "最高風險",
        "yes": "有",
        "no": "無",
        "none": "無",
    },
    "en": {
        "title": "MRONJ Risk Assessment Report",
        "patient": "Patient",
        "name": "Name",
        "birth": "Birth date",
        "id": "ID number",
        "assessed_on": "Assessed on",
        "history": "Medical history",
        "diseases": "Systemic diseases",
        "radiotherapy": "Radiotherapy history",
        "cancer": "Cancer history",
        "bmi": "BMI",
        "medication": "Medication history",
        "drug": "Drug",
        "route": "Route",
        "indication": "Indication",
        "start": "Started",
        "frequency": "Frequency",
        "stop": "Stopped",
        "ongoing": "Currently in use",
        "no_medication": "No antiresorptive medication",
        "exposure": "Exposure",
        "months": "months",
        "results": "Risk assessment",
        "procedure": "Procedure",
        "risk": "Risk",
        "recommendation": "Recommendation",
        "overall": "Highest risk",
        "yes": "Yes",
        "no": "No",
        "none": "None",
    },
}


class ScreeningCLI:
    """MRONJ screening CLI."""

    def __init__(self, language: str = OUTPUT_LANGUAGE, console: Optional[Console] = None):
        self.console = console or Console()
        self.language = language
        self.text = UI_TEXT[language]
        self.service = ScreeningService(language=language)

    def read_intake(self, path: str) -> str:
        """Read intake JSON from a file path, or stdin when path is '-'."""
        if path == "-":
            return sys.stdin.read()
        return Path(path).read_text(encoding="utf-8")

    def show_patient_info(self, result: ScreeningResult):
        """Shows the patient header."""
        t = self.text
        record = result.record

        info_table = Table(show_header=False, box=None)
        info_table.add_column("Key", style="cyan")
        info_table.add_column("Value")

        info_table.add_row(t["name"], escape(record.name or "-"))
        if record.birth_year:
            info_table.add_row(
                t["birth"],
                f"{record.birth_year}-{record.birth_month or 1:02d}-{record.birth_day or 1:02d}",
            )
        info_table.add_row(t["id"], escape(record.id_number or "-"))
        info_table.add_row(t["assessed_on"], result.assessed_on.isoformat())

        panel = Panel(info_table, title=f"[bold]{t['patient']}[/bold]", border_style="blue")
        self.console.print(panel)

    def show_medical_history(self, result: ScreeningResult):
        """Shows systemic diseases, radiotherapy and cancer history."""
        t = self.text
        record = result.record

        history_table = Table(show_header=False, box=None)
        history_table.add_column("Key", style="cyan")
        history_table.add_column("Value")

        diseases = "、".join(sorted(record.systemic_diseases)) or t["none"]
        history_table.add_row(t["diseases"], escape(diseases))

        radiotherapy = t["yes"] if record.has_radiotherapy_history else t["no"]
        if record.has_radiotherapy_history and record.radiotherapy_details:
            radiotherapy += f" ({record.radiotherapy_details})"
        history_table.add_row(t["radiotherapy"], escape(radiotherapy))

        cancer = t["yes"] if record.has_cancer_history else t["no"]
        if record.has_cancer_history and record.cancer_details:
            cancer += f" ({record.cancer_details})"
        history_table.add_row(t["cancer"], escape(cancer))

        if record.bmi is not None:
            history_table.add_row(t["bmi"], f"{record.bmi:.1f}")

        panel = Panel(history_table, title=f"[bold]{t['history']}[/bold]", border_style="blue")
        self.console.print(panel)

    def show_medication(self, result: ScreeningResult):
        """Shows the medication history summary."""
        t = self.text
        record = result.record

        if not record.has_antiresorptive_medication:
            self.console.print(Panel(t["no_medication"], title=f"[bold]{t['medication']}[/bold]", border_style="blue"))
            return

        med_table = Table(show_header=False, box=None)
        med_table.add_column("Key", style="cyan")
        med_table.add_column("Value")

        details = record.medication
        if details is not None:
            med_table.add_row(t["drug"], escape(details.drug_name or "-"))
            med_table.add_row(t["route"], escape(details.administration_route or "-"))
            med_table.add_row(t["indication"], escape(details.indication or "-"))
            med_table.add_row(t["frequency"], escape(details.frequency or "-"))

        med_table.add_row(t["start"], f"{record.medication_start_year}-{record.medication_start_month:02d}")
        if record.is_stopped:
            med_table.add_row(t["stop"], f"{record.medication_stop_year}-{record.medication_stop_month:02d}")
        else:
            med_table.add_row(t["stop"], t["ongoing"])
        med_table.add_row(t["exposure"], f"{result.exposure_months} {t['months']}")

        self.console.print(Panel(med_table, title=f"[bold]{t['medication']}[/bold]", border_style="blue"))

    def show_results(self, result: ScreeningResult):
        """Shows per-procedure risk assessments."""
        t = self.text

        self.console.print("\n")
        self.console.print("═" * 60, style="bold")
        self.console.print(f"[bold cyan]🦷 {t['results']}[/bold cyan]")
        self.console.print("═" * 60, style="bold")

        results_table = Table(show_header=True, header_style="bold cyan")
        results_table.add_column(t["procedure"], style="cyan")
        results_table.add_column(t["risk"])
        results_table.add_column(t["recommendation"])

        for assessment in result.assessments:
            level = assessment.risk_level
            results_table.add_row(
                assessment.procedure.label(self.language),
                f"[{RISK_STYLES[level]}]{RISK_EMOJI[level]} {level.label(self.language)}[/{RISK_STYLES[level]}]",
                assessment.recommendation,
            )

        self.console.print(results_table)

        overall = result.highest_risk
        self.console.print(
            f"\n  {t['overall']}: [{RISK_STYLES[overall]}]{overall.label(self.language)}[/{RISK_STYLES[overall]}]\n"
        )

    def run(self, path: str, today: Optional[date] = None) -> int:
        """Screens one intake document; returns the process exit status."""
        try:
            payload = self.read_intake(path)
            result = self.service.screen(payload, today=today)
        except (OSError, ScreeningError) as e:
            self.console.print(f"\n[bold red]✗ Error: {escape(str(e))}[/bold red]")
            logger.error(f"Screening failed: {e}")
            return 1

        self.console.print(f"\n[bold blue]{self.text['title']}[/bold blue]\n")
        self.show_patient_info(result)
        self.show_medical_history(result)
        self.show_medication(result)
        self.show_results(result)
        return 0


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="MRONJ pre-procedure risk screening")
    parser.add_argument("intake", type=str,
                        help="Path to an intake JSON file, or '-' for stdin")
    parser.add_argument("--today", type=_parse_date, default=None,
                        help="Assessment date (YYYY-MM-DD), defaults to the current date")
    parser.add_argument("--lang", type=str, choices=list(SUPPORTED_LANGUAGES), default=OUTPUT_LANGUAGE,
                        help="Output language")
    return parser


def main(argv=None):
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    try:
        cli = ScreeningCLI(language=args.lang)
        sys.exit(cli.run(args.intake, today=args.today))
    except KeyboardInterrupt:
        print("\n\nExiting...")
        sys.exit(0)
    except Exception as e:
        print(f"\nFatal error: {e}")
        logger.exception("Fatal error in CLI")
        sys.exit(1)


if __name__ == "__main__":
    main()
