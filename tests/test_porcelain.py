"""Tests for git blame porcelain parsing."""

import pytest

from grit.vcs.models import CommitInfo, Hunk
from grit.vcs.porcelain import parse_porcelain

SHA_A = "a" * 40
SHA_B = "b" * 40

PORCELAIN = f"""\
{SHA_A} 1 1 2
author Alice
author-mail <alice@example.com>
author-time 1584100800
author-tz +0000
committer Alice
committer-mail <alice@example.com>
committer-time 1584100800
committer-tz +0000
summary initial
filename a.py
\tone
{SHA_A} 2 2
\ttwo
{SHA_B} 3 3 1
author Bob
author-mail <bob@example.com>
author-time 1584352800
author-tz +0000
committer Bob
committer-mail <bob@example.com>
committer-time 1584352800
committer-tz +0000
summary change
previous {SHA_A} a.py
filename a.py
\tauthor Mallory
{SHA_A} 4 4 1
filename a.py
\tfour
"""


class TestParsePorcelain:
    """Test parse_porcelain function."""

    def test_hunks_in_file_order(self):
        hunks, _ = parse_porcelain(PORCELAIN)
        assert hunks == [
            Hunk(SHA_A, "Alice", 2),
            Hunk(SHA_B, "Bob", 1),
            Hunk(SHA_A, "Alice", 1),
        ]

    def test_repeated_commit_reuses_metadata(self):
        """Metadata appears once; later groups of the same commit still resolve."""
        hunks, _ = parse_porcelain(PORCELAIN)
        assert hunks[-1].final_author_name == "Alice"

    def test_content_lines_are_not_metadata(self):
        hunks, _ = parse_porcelain(PORCELAIN)
        assert "Mallory" not in {h.final_author_name for h in hunks}

    def test_commit_info(self):
        _, commits = parse_porcelain(PORCELAIN)
        assert commits == {
            SHA_A: CommitInfo(SHA_A, 1584100800, "Alice"),
            SHA_B: CommitInfo(SHA_B, 1584352800, "Bob"),
        }

    def test_total_lines(self):
        hunks, _ = parse_porcelain(PORCELAIN)
        assert sum(h.lines_in_hunk for h in hunks) == 4

    def test_empty_output(self):
        assert parse_porcelain("") == ([], {})

    def test_missing_author_raises(self):
        with pytest.raises(ValueError):
            parse_porcelain(f"{SHA_A} 1 1 1\nfilename a.py\n\tx\n")

    def test_bad_committer_time_raises(self):
        raw = f"{SHA_A} 1 1 1\nauthor Alice\ncommitter-time soon\nfilename a.py\n\tx\n"
        with pytest.raises(ValueError):
            parse_porcelain(raw)

    def test_author_names_with_spaces(self):
        raw = (
            f"{SHA_A} 1 1 1\nauthor Ada King Lovelace\ncommitter-time 5\n"
            f"filename a.py\n\tx\n"
        )
        hunks, _ = parse_porcelain(raw)
        assert hunks[0].final_author_name == "Ada King Lovelace"

    @pytest.mark.parametrize("separator", ["\x0c", "\x1c", "\x1e", "\x85", "\u2028", "\r"])
    def test_content_with_line_separators_stays_content(self, separator):
        """Only \\n ends a porcelain line; other separators belong to the file text."""
        raw = (
            f"{SHA_A} 1 1 1\nauthor Alice\ncommitter-time 1584100800\nfilename f\n"
            f"\tx = 1{separator}author Mallory\n"
            f"{SHA_A} 2 2 1\nfilename f\n"
            f"\ty = 2{separator}committer-time soon\n"
        )
        hunks, commits = parse_porcelain(raw)
        assert hunks == [Hunk(SHA_A, "Alice", 1), Hunk(SHA_A, "Alice", 1)]
        assert commits[SHA_A].timestamp == 1584100800
