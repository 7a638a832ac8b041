"""Tests for StabilityClassifier and the static path rules."""

from __future__ import annotations

import pytest

from overskill.prompt_cache.classification import (
    StabilityClassifier,
    classify_path,
    is_ui_component_path,
    score_to_class,
)
from overskill.prompt_cache.models import SourceFile, StabilityClass
from tests.fakes.fake_stability_tracker import FailingStabilityTracker, FakeStabilityTracker


class TestPathRules:
    """classify_path applies the static rules in priority order."""

    @pytest.mark.parametrize(
        "path",
        ["package.json", "package-lock.json", "vite.config.ts", "tailwind.config.js", "index.html"],
    )
    def test_build_and_config_files_are_stable(self, path: str) -> None:
        assert classify_path(path) is StabilityClass.STABLE

    @pytest.mark.parametrize("path", ["src/index.css", "src/main.tsx", "src/App.tsx"])
    def test_entry_files_are_semi_stable(self, path: str) -> None:
        assert classify_path(path) is StabilityClass.SEMI_STABLE

    @pytest.mark.parametrize("path", ["src/components/Header.tsx", "src/pages/Dashboard.tsx"])
    def test_components_and_pages_are_active(self, path: str) -> None:
        assert classify_path(path) is StabilityClass.ACTIVE

    @pytest.mark.parametrize(
        "path",
        ["src/components/Header.test.tsx", "src/pages/Home.spec.tsx", "src/components/__tests__/Nav.tsx"],
    )
    def test_test_files_are_not_active(self, path: str) -> None:
        assert classify_path(path) is StabilityClass.VOLATILE

    def test_everything_else_is_volatile(self) -> None:
        assert classify_path("src/lib/api.ts") is StabilityClass.VOLATILE
        assert classify_path("README.md") is StabilityClass.VOLATILE

    def test_nested_package_json_is_not_root_config(self) -> None:
        assert classify_path("packages/ui/package.json") is StabilityClass.VOLATILE

    def test_leading_dot_slash_ignored(self) -> None:
        assert classify_path("./package.json") is StabilityClass.STABLE

    def test_ui_component_path(self) -> None:
        assert is_ui_component_path("src/components/ui/button.tsx") is True
        assert is_ui_component_path("src/components/Header.jsx") is True
        assert is_ui_component_path("src/components/utils.ts") is False
        assert is_ui_component_path("src/pages/Home.tsx") is False
        assert is_ui_component_path("src/components/Header.test.tsx") is False


class TestScoreToClass:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (10, StabilityClass.STABLE),
            (8, StabilityClass.STABLE),
            (7, StabilityClass.SEMI_STABLE),
            (5, StabilityClass.SEMI_STABLE),
            (4, StabilityClass.ACTIVE),
            (2, StabilityClass.ACTIVE),
            (1, StabilityClass.VOLATILE),
            (0, StabilityClass.VOLATILE),
        ],
    )
    def test_thresholds(self, score: int, expected: StabilityClass) -> None:
        assert score_to_class(score) is expected


class TestClassifierWithTracker:
    def test_scores_drive_groups(self, fixed_clock: float) -> None:
        files = [
            SourceFile("a.ts", "a"),
            SourceFile("b.ts", "b"),
            SourceFile("c.ts", "c"),
            SourceFile("d.ts", "d"),
        ]
        tracker = FakeStabilityTracker({"a.ts": 9, "b.ts": 6, "c.ts": 3, "d.ts": 1})
        groups = StabilityClassifier(clock=lambda: fixed_clock).classify(files, tracker)

        assert groups.source == "tracker"
        assert [f.path for f in groups.stable] == ["a.ts"]
        assert [f.path for f in groups.semi_stable] == ["b.ts"]
        assert [f.path for f in groups.active] == ["c.ts"]
        assert [f.path for f in groups.volatile] == ["d.ts"]

    def test_recent_change_overrides_high_score(self, fixed_clock: float) -> None:
        files = [SourceFile("package.json", "{}"), SourceFile("src/App.tsx", "app")]
        tracker = FakeStabilityTracker(default_score=10, changed={"src/App.tsx"})
        groups = StabilityClassifier(clock=lambda: fixed_clock).classify(files, tracker)

        assert [f.path for f in groups.stable] == ["package.json"]
        assert [f.path for f in groups.volatile] == ["src/App.tsx"]

    def test_queries_recent_window(self, fixed_clock: float) -> None:
        tracker = FakeStabilityTracker()
        classifier = StabilityClassifier(recent_window_seconds=300, clock=lambda: fixed_clock)
        classifier.classify([SourceFile("a.ts", "a")], tracker)
        assert tracker.changed_since_calls == [fixed_clock - 300]

    def test_groups_sorted_largest_first_with_stable_ties(self) -> None:
        files = [
            SourceFile("small.ts", "x" * 10),
            SourceFile("tie1.ts", "x" * 50),
            SourceFile("big.ts", "x" * 100),
            SourceFile("tie2.ts", "x" * 50),
        ]
        groups = StabilityClassifier().classify(files, FakeStabilityTracker())
        assert [f.path for f in groups.stable] == ["big.ts", "tie1.ts", "tie2.ts", "small.ts"]


class TestClassifierFallback:
    """A missing or failing tracker degrades to path rules without raising."""

    def test_no_tracker_uses_path_rules(self, app_files: list[SourceFile]) -> None:
        groups = StabilityClassifier().classify(app_files)
        assert groups.source == "path_rules"
        assert [f.path for f in groups.stable] == ["package.json"]
        assert [f.path for f in groups.semi_stable] == ["src/App.tsx"]
        assert [f.path for f in groups.active] == ["src/components/TodoList.tsx", "src/pages/Home.tsx"]
        assert [f.path for f in groups.volatile] == ["src/lib/supabase.ts"]

    def test_score_failure_falls_back(self, app_files: list[SourceFile]) -> None:
        classifier = StabilityClassifier()
        groups = classifier.classify(app_files, FailingStabilityTracker(fail_on="stability_score"))
        expected = classifier.classify(app_files)

        assert groups.source == "path_rules"
        assert groups == expected

    def test_changed_since_failure_falls_back(self, app_files: list[SourceFile]) -> None:
        groups = StabilityClassifier().classify(app_files, FailingStabilityTracker(fail_on="changed_since"))
        assert groups.source == "path_rules"

    def test_fallback_logs_warning(self, app_files: list[SourceFile], caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING"):
            StabilityClassifier().classify(app_files, FailingStabilityTracker())
        assert "falling back to path rules" in caplog.text

    def test_empty_input(self) -> None:
        groups = StabilityClassifier().classify([])
        assert groups.all_files() == []
