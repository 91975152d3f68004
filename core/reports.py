from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from .grouping import count_by_age, names_by_age_sorted
from .models import Person

PERSON_COLUMNS = ["name", "age", "gender"]


def persons_frame(persons: Iterable[Person]) -> pd.DataFrame:
    """One row per person in file order; unset gender becomes ""."""
    rows = [
        {"name": p.name, "age": p.age, "gender": p.gender or ""}
        for p in persons
    ]
    df = pd.DataFrame(rows, columns=PERSON_COLUMNS)
    return df.astype({"name": str, "age": "int64", "gender": str})


def age_summary_frame(persons: Iterable[Person]) -> pd.DataFrame:
    """
    Indexed by age (ascending), columns:
      - count : persons with that age
      - names : distinct names, sorted, joined by ", "
    """
    persons = list(persons)
    counts = count_by_age(persons)
    names = names_by_age_sorted(persons)
    ages: List[int] = sorted(counts)
    df = pd.DataFrame(
        {
            "count": [counts[a] for a in ages],
            "names": [", ".join(names[a]) for a in ages],
        },
        index=pd.Index(ages, name="age", dtype="int64"),
    )
    return df.astype({"count": "int64"})


def write_summary_csv(persons: Iterable[Person], path: str) -> str:
    df = age_summary_frame(persons)
    df.to_csv(path, encoding="utf-8-sig")
    return path
