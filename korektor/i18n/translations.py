# -*- coding: utf-8 -*-
"""
Translation dictionaries for Czech and English.

Messages the core hands back to its caller, keyed by dotted names.
"""

TRANSLATIONS = {
    "cs": {
        # Export columns
        "export.header.arrival": "Příjezd",
        "export.header.departure": "Odjezd",
        "export.header.country": "Země",
        "export.header.elapsed": "Čas",

        # Weekdays (Monday = 0)
        "day.0": "Pondělí",
        "day.1": "Úterý",
        "day.2": "Středa",
        "day.3": "Čtvrtek",
        "day.4": "Pátek",
        "day.5": "Sobota",
        "day.6": "Neděle",

        # Saving a row
        "save.invalid_format": "Neplatný formát data nebo času pro uložení. Použijte DD.MM.RR HH:MM.",
        "save.order": "Datum odjezdu musí být po datu příjezdu pro uložení.",

        # Import
        "import.empty": "Soubor neobsahuje žádná data nebo je první list prázdný.",
        "import.missing_columns": "Soubor neobsahuje požadované sloupce (Příjezd/Prijzed, Odjezd, Země/Zeme). Zkontrolujte hlavičky v souboru.",
        "import.skipped": "{count} řádků bylo přeskočeno kvůli nevalidním nebo chybějícím datům.",
        "import.none_valid": "Žádné validní záznamy nebyly nalezeny v souboru. Zkontrolujte formát dat a hlavičky.",
        "import.success": "Úspěšně nahráno {count} záznamů.",
        "import.unsupported": "Nepodporovaný typ souboru: {suffix}",

        # Export
        "export.empty": "Žádná data k exportu.",
        "export.success": "Report uložen do {path}.",

        # Misc
        "session.stale": "Záznamy byly mezitím změněny. Načtěte je prosím znovu.",
        "error.generic": "Došlo k chybě při zpracování souboru.",
    },
    "en": {
        # Export columns
        "export.header.arrival": "Arrival",
        "export.header.departure": "Departure",
        "export.header.country": "Country",
        "export.header.elapsed": "Elapsed",

        # Weekdays (Monday = 0)
        "day.0": "Monday",
        "day.1": "Tuesday",
        "day.2": "Wednesday",
        "day.3": "Thursday",
        "day.4": "Friday",
        "day.5": "Saturday",
        "day.6": "Sunday",

        # Saving a row
        "save.invalid_format": "Invalid date or time format. Use DD.MM.YY HH:MM.",
        "save.order": "Departure must be after arrival.",

        # Import
        "import.empty": "The file contains no data or its first sheet is empty.",
        "import.missing_columns": "The file is missing required columns (Arrival, Departure, Country). Check the headers.",
        "import.skipped": "{count} rows were skipped because of invalid or missing data.",
        "import.none_valid": "No valid records were found in the file. Check the data format and headers.",
        "import.success": "Successfully imported {count} records.",
        "import.unsupported": "Unsupported file type: {suffix}",

        # Export
        "export.empty": "No data to export.",
        "export.success": "Report saved to {path}.",

        # Misc
        "session.stale": "The records changed in the meantime. Please reload them.",
        "error.generic": "An error occurred while processing the file.",
    },
}
