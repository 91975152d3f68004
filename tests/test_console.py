import io

from core.models import Person
from ui.console import (
    EXIT_OK,
    EXIT_PARSE_ERROR,
    EXIT_SOURCE_UNAVAILABLE,
    EXIT_WRITE_FAILED,
    main,
    render_grouping,
    render_report,
)


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    code = main(argv, out=out, err=err)
    return code, out.getvalue(), err.getvalue()


def test_render_grouping_nested_and_unset_key():
    text = render_grouping({25: {None: [Person("Ravi", 25)], "F": [Person("Meera", 25, "F")]}})
    assert text.splitlines() == [
        "25 ->",
        "    (unset) -> [Ravi (25)]",
        "    F -> [Meera (25, F)]",
    ]


def test_render_report_single_view():
    persons = [Person("Alice", 30, "F"), Person("Bob", 25, "M"), Person("Carol", 30, "M")]
    text = render_report(persons, "counts")
    assert text.splitlines() == ["== Number of persons by age ==", "25 -> 1", "30 -> 2"]


def test_main_prints_all_views_for_bundled_sample():
    code, out, err = _run([])
    assert code == EXIT_OK
    assert "== Persons by age and gender ==" in out
    assert "Oldest person: Vikram (52)" in out
    assert err == ""


def test_main_partial_file_reports_error_and_exit_code(tmp_path):
    path = _write(tmp_path, "bad.txt", "Alice 30 F\nBob x M\n")
    code, out, err = _run([path, "--view", "sorted"])
    assert code == EXIT_PARSE_ERROR
    assert "30 -> [Alice]" in out
    assert "line 2" in err


def test_main_missing_file(tmp_path):
    code, out, err = _run([str(tmp_path / "nope.txt")])
    assert code == EXIT_SOURCE_UNAVAILABLE
    assert out == ""
    assert err.startswith("error:")


def test_main_merge_and_exports(tmp_path):
    left = _write(tmp_path, "a.txt", "Alice 30 F\n")
    right = _write(tmp_path, "b.txt", "Carol 30 M\nBob 25 M\n")
    csv_path = tmp_path / "summary.csv"
    html_path = tmp_path / "chart.html"
    code, out, _ = _run([left, "--view", "counts", "--merge", right, "--csv", str(csv_path), "--html", str(html_path)])
    assert code == EXIT_OK
    assert "== Merged by age ==" in out
    assert "30 -> [Alice (30, F), Carol (30, M)]" in out
    assert csv_path.exists()
    assert html_path.read_text(encoding="utf-8").startswith("<!doctype html>")


def test_main_unwritable_export_reports_error(tmp_path):
    path = _write(tmp_path, "a.txt", "Alice 30 F\n")
    target = tmp_path / "missing-dir" / "summary.csv"
    code, _, err = _run([path, "--view", "counts", "--csv", str(target)])
    assert code == EXIT_WRITE_FAILED
    assert err.startswith("error: cannot write output")

    code, _, err = _run([path, "--view", "counts", "--html", str(tmp_path / "missing-dir" / "chart.html")])
    assert code == EXIT_WRITE_FAILED
