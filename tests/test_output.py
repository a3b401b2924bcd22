"""Tests for CSV row builders and progress reporting."""

import datetime as dt
import io
import threading

from rich.console import Console

from grit.analysis.models import AuthorStats, DateBucket, EffortRecord, FileDayLines
from grit.cli._output import (
    BYDATE_HEADER,
    bydate_rows,
    byfile_rows,
    effort_rows,
    fame_rows,
    write_csv,
)
from grit.core.progress import ProgressCounter, ProgressReporter, SilentReporter


class TestRows:
    """Test the CSV row builders."""

    def test_fame_rows_format_percentages(self):
        stats = AuthorStats(
            author="Alice",
            total_lines=7,
            commits={"c1", "c3"},
            files={"a", "b", "c"},
            perc_lines=7 / 18,
            perc_commits=2 / 3,
            perc_files=0.75,
        )
        assert fame_rows([stats]) == [["Alice", 3, 2, 7, "75.00", "66.67", "38.89"]]

    def test_bydate_rows_end_with_total(self):
        buckets = [DateBucket(dt.date(2020, 3, 13), 1), DateBucket(dt.date(2020, 3, 14), 0)]
        assert bydate_rows(buckets) == [["2020-03-13", 1], ["2020-03-14", 0], ["Total", 1]]

    def test_bydate_rows_empty(self):
        assert bydate_rows([]) == [["Total", 0]]

    def test_effort_rows(self):
        assert effort_rows([EffortRecord("a.py", 2, 1)]) == [["a.py", 2, 1]]

    def test_byfile_rows(self):
        rows = byfile_rows([FileDayLines("Bob", dt.date(2020, 3, 16), 4)])
        assert rows == [["Bob", "2020-03-16", 4]]

    def test_write_csv_quotes_commas(self, tmp_path):
        out = tmp_path / "out.csv"
        write_csv(["author", "loc"], [["Doe, Jane", 3]], out)
        assert out.read_text() == 'author,loc\n"Doe, Jane",3\n'

    def test_write_csv_stdout(self, capsys):
        write_csv(BYDATE_HEADER, [["Total", 0]])
        assert capsys.readouterr().out == "date,count\nTotal,0\n"


class TestProgress:
    """Test progress counting and reporters."""

    def test_counter_is_monotonic_across_threads(self):
        seen = []
        counter = ProgressCounter(40, lambda done, total, path: seen.append(done))
        threads = [
            threading.Thread(target=lambda: [counter.advance("f") for _ in range(10)])
            for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert seen == list(range(1, 41))
        assert counter.done == 40

    def test_counter_without_callback(self):
        counter = ProgressCounter(2)
        counter.advance("a")
        assert counter.done == 1

    def test_silent_reporter_passes_no_callback(self):
        assert SilentReporter().run("work", lambda cb: cb) is None

    def test_rich_reporter_returns_result(self):
        console = Console(file=io.StringIO(), force_terminal=False)
        reporter = ProgressReporter(console)

        def work(on_progress):
            on_progress(1, 2, "a")
            on_progress(2, 2, "b")
            return "done"

        assert reporter.run("work", work) == "done"
