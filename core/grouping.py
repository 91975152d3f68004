# core/grouping.py
from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .models import Person

AgeGrouping = Dict[int, List[Person]]


# ------------------ grouping ------------------
def group_by_age(persons: Iterable[Person]) -> AgeGrouping:
    """
    Buckets keyed by age. Within a bucket the input order is kept; keys appear
    in order of first occurrence.
    """
    out: AgeGrouping = {}
    for p in persons:
        out.setdefault(p.age, []).append(p)
    return out


def group_by_age_then_gender(persons: Iterable[Person]) -> Dict[int, Dict[Optional[str], List[Person]]]:
    """
    Two-level stable grouping: age, then gender.
    Persons without gender go under UNSET_GENDER, i.e. their gender None.
    """
    out: Dict[int, Dict[Optional[str], List[Person]]] = {}
    for p in persons:
        out.setdefault(p.age, {}).setdefault(p.gender, []).append(p)
    return out


# ------------------ per-age projections ------------------
def count_by_age(persons: Iterable[Person]) -> Dict[int, int]:
    counts: Dict[int, int] = defaultdict(int)
    for p in persons:
        counts[p.age] += 1
    return dict(counts)


def names_by_age(persons: Iterable[Person]) -> Dict[int, List[str]]:
    """Names per age in input order, duplicates kept."""
    return {age: [p.name for p in bucket] for age, bucket in group_by_age(persons).items()}


def names_by_age_sorted(persons: Iterable[Person]) -> Dict[int, List[str]]:
    """Distinct names per age, ascending."""
    return {age: sorted(set(names)) for age, names in names_by_age(persons).items()}


# ------------------ merge ------------------
def merge_groupings(a: Mapping[int, Sequence[Person]], b: Mapping[int, Sequence[Person]]) -> AgeGrouping:
    """
    Combines two age groupings into a new dict; neither input is modified.
    A key present in both gets a[key] followed by b[key]. Keys of `a` come
    first, then the keys found only in `b`.
    """
    out: AgeGrouping = {age: list(bucket) for age, bucket in a.items()}
    for age, bucket in b.items():
        out.setdefault(age, []).extend(bucket)
    return out


# ------------------ selections ------------------
def youngest_older_than(persons: Iterable[Person], age: int) -> Optional[Person]:
    """First person with the lowest age strictly above `age`, or None."""
    candidates = [p for p in persons if p.age > age]
    if not candidates:
        return None
    return min(candidates, key=lambda p: p.age)


def oldest(persons: Iterable[Person]) -> Optional[Person]:
    """First person with the highest age, or None for an empty input."""
    return max(persons, key=lambda p: p.age, default=None)


def sort_by_name_then_age(persons: Iterable[Person]) -> List[Person]:
    return sorted(persons, key=lambda p: (p.name, p.age))


# ------------------ name index ------------------
def index_by_name(persons: Iterable[Person]) -> Dict[str, Person]:
    """Name -> person. With repeated names the later record wins."""
    return {p.name: p for p in persons}


def lookup(index: Mapping[str, Person], name: str, default: Optional[Person] = None) -> Optional[Person]:
    return index.get(name, default)
