"""Console report for a persons file: loads it and prints the grouped views."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, TextIO

from core.errors import SourceUnavailable
from core.grouping import (
    count_by_age,
    group_by_age,
    group_by_age_then_gender,
    merge_groupings,
    names_by_age,
    names_by_age_sorted,
    oldest,
    sort_by_name_then_age,
    youngest_older_than,
)
from core.loader import load_persons, load_sample_persons
from core.logging import set_global_log_level
from core.models import LoadResult, Person
from core.plots import build_age_distribution_figure, fig_to_html
from core.reports import write_summary_csv

VIEWS = ("persons", "by-age", "by-age-gender", "counts", "names", "sorted", "all")

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_SOURCE_UNAVAILABLE = 2
EXIT_WRITE_FAILED = 3


# ------------------ formatting ------------------
def _fmt_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(str(v) for v in value) + "]"
    return str(value)


def render_grouping(mapping: Mapping[Any, Any], indent: str = "") -> str:
    """One "key -> value" line per entry; nested mappings are indented."""
    lines: List[str] = []
    for key, value in mapping.items():
        label = "(unset)" if key is None else str(key)
        if isinstance(value, dict):
            lines.append(f"{indent}{label} ->")
            nested = render_grouping(value, indent + "    ")
            if nested:
                lines.append(nested)
        else:
            lines.append(f"{indent}{label} -> {_fmt_value(value)}")
    return "\n".join(lines)


def render_persons(persons: Iterable[Person]) -> str:
    return "\n".join(str(p) for p in persons)


def render_highlights(persons: Sequence[Person], threshold: int = 20) -> str:
    lines: List[str] = []
    young = youngest_older_than(persons, threshold)
    if young is not None:
        lines.append(f"Youngest person older than {threshold}: {young.name} ({young.age})")
    old = oldest(persons)
    if old is not None:
        lines.append(f"Oldest person: {old.name} ({old.age})")
    return "\n".join(lines)


def _sorted_keys(mapping: Mapping[int, Any]) -> Dict[int, Any]:
    return {k: mapping[k] for k in sorted(mapping)}


SECTIONS: Dict[str, Callable[[Sequence[Person]], str]] = {
    "persons": lambda ps: render_persons(sort_by_name_then_age(ps)),
    "by-age": lambda ps: render_grouping(_sorted_keys(group_by_age(ps))),
    "by-age-gender": lambda ps: render_grouping(_sorted_keys(group_by_age_then_gender(ps))),
    "counts": lambda ps: render_grouping(_sorted_keys(count_by_age(ps))),
    "names": lambda ps: render_grouping(_sorted_keys(names_by_age(ps))),
    "sorted": lambda ps: render_grouping(_sorted_keys(names_by_age_sorted(ps))),
}

TITLES = {
    "persons": "Persons sorted by name",
    "by-age": "Persons by age",
    "by-age-gender": "Persons by age and gender",
    "counts": "Number of persons by age",
    "names": "Names by age",
    "sorted": "Names by age, sorted",
}


def render_report(persons: Sequence[Person], view: str = "all") -> str:
    names = [v for v in VIEWS if v != "all"] if view == "all" else [view]
    blocks = []
    for name in names:
        body = SECTIONS[name](persons)
        blocks.append(f"== {TITLES[name]} ==\n{body}" if body else f"== {TITLES[name]} ==")
    if view == "all":
        highlights = render_highlights(persons)
        if highlights:
            blocks.append(highlights)
    return "\n\n".join(blocks)


# ------------------ driver ------------------
def _load(path: Optional[str], err: TextIO) -> LoadResult:
    result = load_persons(path) if path else load_sample_persons()
    if result.error is not None:
        where = path or "bundled sample"
        print(
            f"warning: {where}: {result.error}; using the {len(result.persons)} records read before it",
            file=err,
        )
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="persons-report",
        description="Group the persons of a 'name age [gender]' file by age and gender.",
    )
    parser.add_argument("path", nargs="?", help="persons file (default: bundled sample)")
    parser.add_argument("--view", choices=VIEWS, default="all", help="which view to print")
    parser.add_argument("--merge", metavar="OTHER", help="merge the by-age grouping with this second file")
    parser.add_argument("--csv", metavar="OUT", help="write the per-age summary as CSV")
    parser.add_argument("--html", metavar="OUT", help="write the age distribution chart as HTML")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    args = build_parser().parse_args(argv)

    if args.verbose:
        set_global_log_level(logging.DEBUG)

    exit_code = EXIT_OK
    try:
        result = _load(args.path, err)
        other = _load(args.merge, err) if args.merge else None
    except SourceUnavailable as e:
        print(f"error: {e}", file=err)
        return EXIT_SOURCE_UNAVAILABLE

    if not result.ok or (other is not None and not other.ok):
        exit_code = EXIT_PARSE_ERROR

    persons = list(result.persons)
    print(render_report(persons, args.view), file=out)

    if other is not None:
        merged = merge_groupings(group_by_age(persons), group_by_age(other.persons))
        print(f"\n== Merged by age ==\n{render_grouping(_sorted_keys(merged))}", file=out)
        persons = persons + list(other.persons)

    try:
        if args.csv:
            write_summary_csv(persons, args.csv)
            print(f"Summary written to {args.csv}", file=out)
        if args.html:
            with open(args.html, "w", encoding="utf-8") as f:
                f.write(fig_to_html(build_age_distribution_figure(persons)))
            print(f"Chart written to {args.html}", file=out)
    except OSError as e:
        print(f"error: cannot write output: {e}", file=err)
        return EXIT_WRITE_FAILED

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
