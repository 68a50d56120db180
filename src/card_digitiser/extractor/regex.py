"""Rule-based extractor used when no LLM result is available."""

import re

from card_digitiser.extractor.base import Extractor
from card_digitiser.models.card import NOT_AVAILABLE, Card

EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)

# Optional +country, optional (area), space/hyphen separators, roughly 7-13 digits
PHONE_PATTERN = re.compile(
    r"\+?[0-9]{1,3}[\s-]?\(?[0-9]{2,4}\)?[\s-]?[0-9]{3,4}[\s-]?[0-9]{3,4}"
)

CAPITALIZED_WORD = re.compile(r"[A-Z]")


class RegexExtractor(Extractor):
    """Extract name, phones, email and other lines with regex heuristics."""

    @property
    def name(self) -> str:
        return "regex"

    def extract(self, ocr_text: str) -> Card:
        """Extract business card data with regular expressions."""
        lines = self.split_lines(ocr_text)
        emails = self.extract_emails(ocr_text)
        phones = self.extract_phones(ocr_text)
        name = self.extract_name(lines, emails, phones)
        other = self.extract_other(lines, name, emails, phones)

        return Card(
            name=name or NOT_AVAILABLE,
            phones=phones,
            email=emails[0] if emails else NOT_AVAILABLE,
            other=other,
        )

    @staticmethod
    def split_lines(text: str) -> list[str]:
        """Return trimmed, non-empty lines."""
        return [line.strip() for line in text.split("\n") if line.strip()]

    @staticmethod
    def extract_emails(text: str) -> list[str]:
        return EMAIL_PATTERN.findall(text)

    @staticmethod
    def extract_phones(text: str) -> list[str]:
        return PHONE_PATTERN.findall(text)

    @staticmethod
    def extract_name(lines: list[str], emails: list[str], phones: list[str]) -> str:
        """
        Pick the line most likely to be a person's name.

        Lines that are an email, or contain a phone number, are skipped.
        The remaining line with the most capitalized words wins; the first
        one wins ties. Without any capitalized word, the first candidate is
        returned.

        Args:
            lines: Trimmed, non-empty OCR lines.
            emails: Emails found in the text.
            phones: Phone numbers found in the text.

        Returns:
            The chosen line, or an empty string if there is no candidate.
        """
        candidates = [
            line
            for line in lines
            if line not in emails and not any(phone in line for phone in phones)
        ]

        best_score = -1
        best_line = ""
        for line in candidates:
            score = sum(1 for word in line.split() if CAPITALIZED_WORD.match(word))
            if score > best_score:
                best_score = score
                best_line = line

        if best_score > 0:
            return best_line
        return candidates[0] if candidates else ""

    @staticmethod
    def extract_other(
        lines: list[str], name: str, emails: list[str], phones: list[str]
    ) -> list[str]:
        """Return lines that are not the name, an email or a phone number."""
        excluded = {name, *emails, *phones}
        return [line for line in lines if line not in excluded]
