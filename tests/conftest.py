"""Shared fixtures for overskill tests."""

from __future__ import annotations

import pytest

from overskill.prompt_cache.models import SourceFile


@pytest.fixture
def app_files() -> list[SourceFile]:
    """Snapshot of a small generated React app covering every path-rule class."""
    return [
        SourceFile(path="package.json", content='{"name": "todo-app", "private": true}'),
        SourceFile(path="src/App.tsx", content="export default function App() { return <Home />; }"),
        SourceFile(path="src/components/TodoList.tsx", content="export function TodoList() {}\n" * 20),
        SourceFile(path="src/pages/Home.tsx", content="export function Home() {}\n" * 10),
        SourceFile(path="src/lib/supabase.ts", content="export const client = createClient();"),
    ]


@pytest.fixture
def fixed_clock() -> float:
    return 1_700_000_000.0
