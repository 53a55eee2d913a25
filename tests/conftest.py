"""Shared pytest fixtures for the EasyStack test suite.

Provides reusable fixtures for:
- A fake Vite React skeleton (the files ``npm create vite`` would produce)
- ``ToolConfig`` instances pointing at a temporary output directory
- Ready-made ``ProjectConfig`` answer sets
- A mocked ``run_command`` that records npm calls instead of running them
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from easystack.config import ProjectConfig, ToolConfig


# ---------------------------------------------------------------------------
# Fake Vite skeleton
# ---------------------------------------------------------------------------

VITE_MAIN_JSX = textwrap.dedent("""\
    import { StrictMode } from 'react'
    import { createRoot } from 'react-dom/client'
    import './index.css'
    import App from './App.jsx'

    createRoot(document.getElementById('root')).render(
      <StrictMode>
        <App />
      </StrictMode>,
    )
""")

VITE_INDEX_HTML = textwrap.dedent("""\
    <!doctype html>
    <html lang="en">
      <head>
        <meta charset="UTF-8" />
        <link rel="icon" type="image/svg+xml" href="/vite.svg" />
        <meta name="viewport" content="width=device-width, initial-scale=1.0" />
        <title>Vite + React</title>
      </head>
      <body>
        <div id="root"></div>
        <script type="module" src="/src/main.jsx"></script>
      </body>
    </html>
""")

VITE_CONFIG_JS = textwrap.dedent("""\
    import { defineConfig } from 'vite'
    import react from '@vitejs/plugin-react'

    // https://vite.dev/config/
    export default defineConfig({
      plugins: [react()],
    })
""")

VITE_APP_JSX = textwrap.dedent("""\
    import { useState } from 'react'
    import './App.css'

    function App() {
      const [count, setCount] = useState(0)
      return <button onClick={() => setCount(count + 1)}>count is {count}</button>
    }

    export default App
""")

VITE_INDEX_CSS = ":root {\n  color-scheme: light dark;\n}\n"


def make_vite_skeleton(project_path: Path) -> Path:
    """Write the handful of files the React template of ``create vite`` produces."""
    src = project_path / "src"
    src.mkdir(parents=True, exist_ok=True)
    (project_path / "index.html").write_text(VITE_INDEX_HTML, encoding="utf-8")
    (project_path / "vite.config.js").write_text(VITE_CONFIG_JS, encoding="utf-8")
    (project_path / "package.json").write_text('{"name": "demo"}\n', encoding="utf-8")
    (src / "main.jsx").write_text(VITE_MAIN_JSX, encoding="utf-8")
    (src / "App.jsx").write_text(VITE_APP_JSX, encoding="utf-8")
    (src / "index.css").write_text(VITE_INDEX_CSS, encoding="utf-8")
    return project_path


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def tools(tmp_path: Path) -> ToolConfig:
    """ToolConfig that creates projects under ``tmp_path``."""
    return ToolConfig(output_dir=tmp_path)


@pytest.fixture
def vite_project(tools: ToolConfig) -> Path:
    """A scaffolded-looking ``demo`` project under the tools output dir."""
    return make_vite_skeleton(tools.project_path("demo"))


@pytest.fixture
def tailwind_redux_config() -> ProjectConfig:
    return ProjectConfig(
        project_name="demo",
        css_framework="Tailwind CSS",
        use_redux=True,
        use_router=False,
    )


@pytest.fixture
def bootstrap_cdn_config() -> ProjectConfig:
    return ProjectConfig(
        project_name="demo",
        css_framework="Bootstrap",
        bootstrap_mode="CDN",
        use_redux=False,
        use_router=False,
    )


@pytest.fixture
def full_config() -> ProjectConfig:
    """Bootstrap via npm with Redux and Router."""
    return ProjectConfig(
        project_name="demo",
        css_framework="Bootstrap",
        bootstrap_mode="npm",
        use_redux=True,
        use_router=True,
    )


@pytest.fixture
def bare_config() -> ProjectConfig:
    return ProjectConfig(
        project_name="demo",
        css_framework="None",
        use_redux=False,
        use_router=False,
    )


# ---------------------------------------------------------------------------
# Mock npm
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_npm():
    """Patch ``run_command`` as used by ``NpmRunner``.

    Every call is recorded on the returned mock.  ``npm create`` writes a fake
    Vite skeleton into ``<cwd>/<project name>`` so later stages have files to
    work on.  Set ``mock_npm.fail_on`` to a sub-command (``"create"``,
    ``"install"``) or a package name to make matching calls exit with 1.

    Usage:
        def test_run(mock_npm):
            ...
            assert mock_npm.npm_args()[0][0] == "create"
    """
    async def fake_run_command(cmd: list[str], cwd: Any = None, **kwargs: Any):
        args = cmd[1:]
        for token in mock.fail_on:
            if token in args:
                return 1
        if args and args[0] == "create":
            make_vite_skeleton(Path(cwd) / args[2])
        return 0

    mock = AsyncMock(side_effect=fake_run_command)
    mock.fail_on = []
    mock.npm_args = lambda: [call.args[0][1:] for call in mock.call_args_list]
    with patch("easystack.scaffolder.npm.run_command", mock):
        yield mock

