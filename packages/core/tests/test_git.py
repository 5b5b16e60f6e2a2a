"""Tests for the diff-stat parser and the git subprocess wrappers."""

from unittest.mock import MagicMock, patch

import pytest

from ghai_core.errors import GitError
from ghai_core.git import (
    commit,
    get_staged_files,
    get_staged_stats,
    parse_diff_stat,
    parse_diff_stat_output,
)
from ghai_core.models import DiffStats


def _completed(stdout="", stderr="", returncode=0):
    return MagicMock(stdout=stdout, stderr=stderr, returncode=returncode)


class TestParseDiffStat:
    def test_all_clauses(self):
        stats = parse_diff_stat("3 files changed, 12 insertions(+), 4 deletions(-)")
        assert stats == DiffStats(files_changed=3, insertions=12, deletions=4)
        assert stats.total_changes == 16

    def test_missing_deletions_clause(self):
        stats = parse_diff_stat("3 files changed, 12 insertions(+)")
        assert stats == DiffStats(files_changed=3, insertions=12, deletions=0)
        assert stats.total_changes == 12

    def test_missing_insertions_clause(self):
        assert parse_diff_stat(" 1 file changed, 2 deletions(-)") == DiffStats(1, 0, 2)

    def test_singular_forms(self):
        assert parse_diff_stat("1 file changed, 1 insertion(+), 1 deletion(-)") == DiffStats(1, 1, 1)

    def test_empty_line(self):
        assert parse_diff_stat("") == DiffStats()

    def test_unrelated_text(self):
        assert parse_diff_stat("nothing to see here") == DiffStats()

    def test_bad_number_is_ignored_per_clause(self):
        assert parse_diff_stat("many files changed, 5 insertions(+)") == DiffStats(0, 5, 0)

    def test_negative_number_is_ignored(self):
        assert parse_diff_stat("-2 files changed") == DiffStats()

    def test_none_is_a_contract_violation(self):
        with pytest.raises(TypeError):
            parse_diff_stat(None)


class TestParseDiffStatOutput:
    def test_uses_last_non_empty_line(self):
        output = " src/app.py | 10 +++++++---\n README.md  |  2 +-\n 2 files changed, 8 insertions(+), 4 deletions(-)\n\n"
        assert parse_diff_stat_output(output) == DiffStats(2, 8, 4)

    def test_empty_output(self):
        assert parse_diff_stat_output("") == DiffStats()


class TestGitCommands:
    def test_staged_files_drops_blank_lines(self):
        with patch("ghai_core.git.subprocess.run", return_value=_completed("a.py\n\nb.py\n")) as mock_run:
            assert get_staged_files("/repo") == ["a.py", "b.py"]
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "diff", "--cached", "--name-only"]
        assert kwargs["cwd"] == "/repo"

    def test_staged_stats(self):
        with patch("ghai_core.git.subprocess.run", return_value=_completed(" 1 file changed, 3 insertions(+)\n")):
            assert get_staged_stats(".") == DiffStats(1, 3, 0)

    def test_git_failure_raises_git_error(self):
        with patch("ghai_core.git.subprocess.run", return_value=_completed(stderr="not a git repository", returncode=128)):
            with pytest.raises(GitError, match="not a git repository"):
                get_staged_files(".")

    def test_missing_git_binary(self):
        with patch("ghai_core.git.subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(GitError):
                get_staged_files(".")

    def test_commit_success_returns_short_hash(self):
        results = [_completed("[main abc1234] feat: x\n"), _completed("abc1234\n")]
        with patch("ghai_core.git.subprocess.run", side_effect=results) as mock_run:
            result = commit(".", "feat: x")
        assert result.success is True
        assert result.commit_hash == "abc1234"
        assert mock_run.call_args_list[0].args[0] == ["git", "commit", "-m", "feat: x"]

    def test_commit_failure_is_reported_not_raised(self):
        with patch("ghai_core.git.subprocess.run", return_value=_completed(stdout="nothing to commit", returncode=1)):
            result = commit(".", "feat: x")
        assert result.success is False
        assert result.commit_hash is None
        assert "nothing to commit" in result.message

