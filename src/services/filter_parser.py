"""
Search box mini-language.

A query may start with one qualifier followed by free text:

    before:31/12/2023 xss        created before 31 Dec 2023
    after:01/01/2024             created after the end of 01 Jan 2024
    reporter:alice@example.com   reported by that address

Anything else is free text matched against title and content.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from src.core.logging import logger
from src.db.models import SearchFilter


class Qualifier(Enum):
    NONE = "none"
    BEFORE = "before"
    AFTER = "after"
    REPORTER = "reporter"


@dataclass(frozen=True)
class ParsedQuery:
    qualifier: Qualifier
    value: str
    remainder: str


QUERY_PATTERN = re.compile(r"^(before|after|reporter):(\S*)(.*)$", re.IGNORECASE | re.DOTALL)
DATE_FORMAT = "%d/%m/%Y"
END_OF_DAY = timedelta(days=1, milliseconds=-1)


class FilterParser:
    @staticmethod
    def tokenize(raw: Optional[str]) -> ParsedQuery:
        text = (raw or "").strip()
        match = QUERY_PATTERN.match(text)
        if not match:
            return ParsedQuery(Qualifier.NONE, "", text)
        word, value, remainder = match.groups()
        return ParsedQuery(Qualifier(word.lower()), value, remainder)

    @staticmethod
    def parse_date(value: str) -> Optional[datetime]:
        """Parse a dd/MM/yyyy token to midnight UTC, or None if it isn't one."""
        try:
            day = datetime.strptime(value, DATE_FORMAT)
        except ValueError:
            logger.debug(f"Ignoring invalid date in search query: {value!r}")
            return None
        return day.replace(tzinfo=timezone.utc)

    def parse(self, raw: Optional[str]) -> SearchFilter:
        query = self.tokenize(raw)
        search_value = query.remainder.strip().lower()

        if query.qualifier == Qualifier.BEFORE:
            return SearchFilter(search_value=search_value, before_date=self.parse_date(query.value))

        if query.qualifier == Qualifier.AFTER:
            day = self.parse_date(query.value)
            after_date = day + END_OF_DAY if day else None
            return SearchFilter(search_value=search_value, after_date=after_date)

        if query.qualifier == Qualifier.REPORTER:
            email = query.value.strip().lower() or None
            return SearchFilter(search_value=search_value, reporter_email=email)

        return SearchFilter(search_value=search_value)


def parse_search(raw: Optional[str]) -> SearchFilter:
    return FilterParser().parse(raw)
