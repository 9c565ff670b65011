from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"

ROUTE_FILES = [
    "routes/__root.tsx",
    "routes/index.tsx",
    "routes/about.tsx",
    "routes/posts.tsx",
    "routes/posts/index.tsx",
    "routes/posts/$postId.tsx",
]


@pytest.fixture
def route_tree_source() -> str:
    return (FIXTURES / "routeTree.gen.ts").read_text(encoding="utf-8")


@pytest.fixture
def workspace(tmp_path: Path, route_tree_source: str) -> Path:
    """
    <tmp>/app/src/routeTree.gen.ts with a source file for every route.
    """
    src = tmp_path / "app" / "src"
    for rel in ROUTE_FILES:
        p = src / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("export const Route = {}\n", encoding="utf-8")
    (src / "routeTree.gen.ts").write_text(route_tree_source, encoding="utf-8")
    return tmp_path / "app"
