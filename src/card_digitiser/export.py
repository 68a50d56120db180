"""Export of stored cards to JSON and CSV files."""

import csv
import io
import json
import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from card_digitiser.errors import EmptyExportError
from card_digitiser.models.card import Card

logger = logging.getLogger(__name__)

CSV_HEADER = "Name,Phone(s),Email,Other"
JOIN_SEPARATOR = "; "


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


class Exporter:
    """Serialize cards to the downloadable ``cards.json`` / ``cards.csv``."""

    FILENAMES = {
        ExportFormat.JSON: "cards.json",
        ExportFormat.CSV: "cards.csv",
    }

    def to_json(self, cards: Iterable[Card]) -> str:
        """
        Format cards as a pretty-printed JSON array.

        Args:
            cards: Cards to format.

        Returns:
            JSON string.
        """
        return json.dumps(
            [card.model_dump() for card in cards], indent=2, ensure_ascii=False
        )

    def to_csv(self, cards: Iterable[Card]) -> str:
        """
        Format cards as CSV, one row per card.

        List fields are joined with ``"; "``; every value is quoted.

        Args:
            cards: Cards to format.

        Returns:
            CSV string with a header row.
        """
        output = io.StringIO()
        output.write(CSV_HEADER + "\n")
        writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")

        for card in cards:
            writer.writerow(
                [
                    card.name,
                    JOIN_SEPARATOR.join(card.phones),
                    card.email,
                    JOIN_SEPARATOR.join(card.other),
                ]
            )

        return output.getvalue()

    def export(
        self,
        cards: Iterable[Card],
        fmt: ExportFormat | str,
        output_dir: str | Path = ".",
    ) -> Path:
        """
        Write cards to ``cards.<fmt>`` in a directory.

        Returns:
            Path of the written file.

        Raises:
            EmptyExportError: If there are no cards; no file is written.
        """
        fmt = ExportFormat(fmt)
        cards = list(cards)
        if not cards:
            raise EmptyExportError("No cards to export!")

        content = self.to_csv(cards) if fmt is ExportFormat.CSV else self.to_json(cards)

        path = Path(output_dir) / self.FILENAMES[fmt]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.info("Exported %d cards to %s", len(cards), path)
        return path
