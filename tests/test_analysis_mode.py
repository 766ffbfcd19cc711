"""Tests for pull request analysis mode selection."""

import pytest

from sonar_prebuild.data.context import ANALYSIS_MODE_KEY, INCREMENTAL_MODE_KEY
from sonar_prebuild.tools.analysis_mode import (
    AnalysisMode,
    ConfigurationConflict,
    check_mode_conflict,
    mode_args,
    recorded_mode,
    select_mode,
)
from sonar_prebuild.utils.versions import ServerVersion


class TestSelectMode:
    """Tests for select_mode function."""

    @pytest.mark.parametrize(
        ("major", "minor", "expected"),
        [
            (5, 2, AnalysisMode.ISSUES),
            (5, 1, AnalysisMode.INCREMENTAL),
            (6, 0, AnalysisMode.ISSUES),
            (4, 9, AnalysisMode.INCREMENTAL),
            (5, 0, AnalysisMode.INCREMENTAL),
            (7, 9, AnalysisMode.ISSUES),
            (0, 0, AnalysisMode.INCREMENTAL),
        ],
    )
    def test_mode_boundary(self, context, major: int, minor: int, expected: AnalysisMode) -> None:
        """Test issues mode starts at 5.2."""
        selection = select_mode(ServerVersion(major, minor), True, context)
        assert selection is not None
        assert selection.mode is expected

    def test_issues_args(self, context) -> None:
        """Test issues mode appends mode and report path."""
        selection = select_mode(ServerVersion(5, 6), True, context)
        assert selection.args == [
            "/d:sonar.analysis.mode=issues",
            "/d:sonar.report.export.path=sonar-report.json",
        ]

    def test_incremental_args(self, context) -> None:
        """Test incremental mode appends only the mode."""
        selection = select_mode(ServerVersion(5, 1), True, context)
        assert selection.args == ["/d:sonar.analysis.mode=incremental"]

    def test_records_issues_mode(self, context) -> None:
        """Test issues mode is written to the context."""
        select_mode(ServerVersion(6, 0), True, context)
        assert context.get(ANALYSIS_MODE_KEY) == "issues"
        assert context.get(INCREMENTAL_MODE_KEY) == "false"

    def test_records_incremental_mode(self, context) -> None:
        """Test incremental mode is written to the context."""
        select_mode(ServerVersion(4, 9), True, context)
        assert context.get(ANALYSIS_MODE_KEY) == "incremental"
        assert context.get(INCREMENTAL_MODE_KEY) == "true"

    @pytest.mark.parametrize("version", [ServerVersion(4, 0), ServerVersion(5, 2), ServerVersion(9, 9)])
    def test_feature_disabled_not_applicable(self, context, version: ServerVersion) -> None:
        """Test disabled feature returns None and records nothing."""
        assert select_mode(version, False, context) is None
        assert not context.exists(ANALYSIS_MODE_KEY)
        assert not context.exists(INCREMENTAL_MODE_KEY)

    @pytest.mark.parametrize("enabled", [True, False])
    @pytest.mark.parametrize("version", [ServerVersion(4, 9), ServerVersion(6, 0)])
    def test_conflict_regardless_of_version_or_flag(
        self, context, version: ServerVersion, enabled: bool
    ) -> None:
        """Test an existing mode argument always conflicts."""
        existing = ["begin", "/k:key", "/d:sonar.analysis.mode=preview"]
        with pytest.raises(ConfigurationConflict, match="sonar.analysis.mode"):
            select_mode(version, enabled, context, existing_args=existing)
        assert not context.exists(ANALYSIS_MODE_KEY)


class TestCheckModeConflict:
    """Tests for check_mode_conflict function."""

    def test_no_conflict(self) -> None:
        """Test plain args pass."""
        check_mode_conflict(["begin", "/k:key", "/n:name", "/v:1.0"])

    def test_empty_and_none(self) -> None:
        """Test empty input passes."""
        check_mode_conflict([])
        check_mode_conflict("")
        check_mode_conflict(None)

    def test_conflict(self) -> None:
        """Test mode property is detected anywhere in the args."""
        with pytest.raises(ConfigurationConflict):
            check_mode_conflict(["begin", "/d:sonar.analysis.mode=issues"])


class TestModeArgs:
    """Tests for mode_args and AnalysisMode."""

    def test_values(self) -> None:
        """Test enum values match the scanner property values."""
        assert AnalysisMode.ISSUES.value == "issues"
        assert AnalysisMode.INCREMENTAL.value == "incremental"

    def test_mode_args(self) -> None:
        """Test argument fragments."""
        assert mode_args(AnalysisMode.INCREMENTAL) == ["/d:sonar.analysis.mode=incremental"]
        assert mode_args(AnalysisMode.ISSUES)[-1] == "/d:sonar.report.export.path=sonar-report.json"


class TestRecordedMode:
    """Tests for recorded_mode function."""

    def test_nothing_recorded(self, context) -> None:
        """Test None when no mode was chosen."""
        assert recorded_mode(context) is None

    def test_round_trip_through_context(self, context) -> None:
        """Test a later step reads the mode back."""
        select_mode(ServerVersion(5, 2), True, context)
        assert recorded_mode(context) is AnalysisMode.ISSUES

    def test_unknown_value_ignored(self, context) -> None:
        """Test unknown stored values are ignored."""
        context.set(ANALYSIS_MODE_KEY, "preview")
        assert recorded_mode(context) is None
