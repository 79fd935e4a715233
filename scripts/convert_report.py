"""
Script to normalize a border crossing report.

Reads a spreadsheet, drops invalid rows, recomputes missing durations and
writes a sorted report named after the month, license plate and driver.

Usage:
    python scripts/convert_report.py <input.xlsx|.xls|.ods|.csv> [output_dir] [--plate SPZ] [--driver NAME]
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from korektor.domain.errors import KorektorError
from korektor.i18n import set_language, tr
from korektor.infra.config import get_settings
from korektor.services.report_session import ReportSession


def _pop_option(args, name):
    if name in args:
        index = args.index(name)
        if index + 1 < len(args):
            value = args[index + 1]
            del args[index:index + 2]
            return value
    return None


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    plate = _pop_option(args, "--plate")
    driver = _pop_option(args, "--driver")

    if not args:
        print("Usage: python convert_report.py <input file> [output_dir] [--plate SPZ] [--driver NAME]")
        return 1

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    input_path = Path(args[0])
    if not input_path.exists():
        print(f"Error: Input file '{input_path}' not found.")
        return 1

    settings = get_settings()
    set_language(settings.preferences.language)

    session = ReportSession(settings.preferences)
    if plate is not None:
        session.license_plate = plate
    if driver is not None:
        session.driver_name = driver

    output_dir = Path(args[1]) if len(args) > 1 else settings.get_export_dir()

    try:
        result = session.load_file(input_path)
        if result.skipped:
            print(tr("import.skipped", count=result.skipped))
        if result.imported == 0:
            print(tr("import.none_valid"))
            return 1
        print(tr("import.success", count=result.imported))

        output_file = session.export_file(output_dir)
    except KorektorError as e:
        print(tr(e.message_key, **e.details))
        return 1

    print(tr("export.success", path=output_file))
    return 0


if __name__ == "__main__":
    sys.exit(main())
