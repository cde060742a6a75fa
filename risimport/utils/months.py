"""Month symbols used for the resolved publication month of a record."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class Month(Enum):
    JANUARY = (1, "jan", "January")
    FEBRUARY = (2, "feb", "February")
    MARCH = (3, "mar", "March")
    APRIL = (4, "apr", "April")
    MAY = (5, "may", "May")
    JUNE = (6, "jun", "June")
    JULY = (7, "jul", "July")
    AUGUST = (8, "aug", "August")
    SEPTEMBER = (9, "sep", "September")
    OCTOBER = (10, "oct", "October")
    NOVEMBER = (11, "nov", "November")
    DECEMBER = (12, "dec", "December")

    def __init__(self, number: int, short_name: str, full_name: str):
        self.number = number
        self.short_name = short_name
        self.full_name = full_name


_BY_NUMBER = {m.number: m for m in Month}


def resolve_month(number: int) -> Optional[Month]:
    """Return the Month for 1..12, None for anything else."""
    return _BY_NUMBER.get(number)
