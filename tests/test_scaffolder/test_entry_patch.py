"""Tests for the entry-file patcher (easystack.scaffolder.entry_patch).

Covers:
- wrappers_for ordering (Provider outside Router)
- render_wrapped_root nesting and indentation
- patch_entry_source for every Redux/Router combination
- React import insertion and import ordering
- store creation placement and missing render call site
- every <App /> occurrence wrapped
- EntryPointPatcher reading and writing src/main.jsx
"""

from __future__ import annotations

from pathlib import Path

import pytest

from easystack.config import ProjectConfig, ToolConfig
from easystack.scaffolder.entry_patch import (
    REACT_IMPORT,
    REDUX_WRAPPER,
    RENDER_CALL,
    ROOT_TAG,
    ROUTER_WRAPPER,
    EntryPatchError,
    EntryPointPatcher,
    patch_entry_source,
    render_wrapped_root,
    wrappers_for,
)

pytestmark = pytest.mark.unit

STORE_LINE = "const store = legacy_createStore(Reducer);"
ROUTER_IMPORT = "import { BrowserRouter as Router } from 'react-router-dom';"


def _config(redux: bool, router: bool) -> ProjectConfig:
    return ProjectConfig(project_name="demo", use_redux=redux, use_router=router)


# ---------------------------------------------------------------------------
# wrappers_for
# ---------------------------------------------------------------------------


class TestWrappersFor:
    def test_both(self):
        assert wrappers_for(_config(True, True)) == [REDUX_WRAPPER, ROUTER_WRAPPER]

    def test_redux_only(self):
        assert wrappers_for(_config(True, False)) == [REDUX_WRAPPER]

    def test_router_only(self):
        assert wrappers_for(_config(False, True)) == [ROUTER_WRAPPER]

    def test_none(self):
        assert wrappers_for(_config(False, False)) == []


# ---------------------------------------------------------------------------
# render_wrapped_root
# ---------------------------------------------------------------------------


class TestRenderWrappedRoot:
    def test_no_wrappers_is_root_tag(self):
        assert render_wrapped_root([]) == ROOT_TAG

    def test_two_levels(self):
        assert render_wrapped_root([REDUX_WRAPPER, ROUTER_WRAPPER]) == (
            "<Provider store={store}>\n"
            "  <Router>\n"
            "    <App />\n"
            "  </Router>\n"
            "</Provider>"
        )

    def test_indent_applied_after_first_line(self):
        assert render_wrapped_root([ROUTER_WRAPPER], indent="    ") == (
            "<Router>\n"
            "      <App />\n"
            "    </Router>"
        )


# ---------------------------------------------------------------------------
# patch_entry_source
# ---------------------------------------------------------------------------


class TestPatchEntrySource:
    def test_redux_and_router_nesting(self, vite_project: Path):
        source = (vite_project / "src" / "main.jsx").read_text(encoding="utf-8")
        result = patch_entry_source(source, [REDUX_WRAPPER, ROUTER_WRAPPER])

        expected_block = (
            "    <Provider store={store}>\n"
            "      <Router>\n"
            "        <App />\n"
            "      </Router>\n"
            "    </Provider>\n"
        )
        assert expected_block in result
        assert "  <StrictMode>\n" + expected_block + "  </StrictMode>," in result
        # The original tag survives unchanged as the innermost content.
        assert result.count(ROOT_TAG) == 1

    def test_redux_only(self, vite_project: Path):
        source = (vite_project / "src" / "main.jsx").read_text(encoding="utf-8")
        result = patch_entry_source(source, [REDUX_WRAPPER])

        assert "<Provider store={store}>\n      <App />\n    </Provider>" in result
        assert "<Router>" not in result
        assert ROUTER_IMPORT not in result

    def test_router_only(self, vite_project: Path):
        source = (vite_project / "src" / "main.jsx").read_text(encoding="utf-8")
        result = patch_entry_source(source, [ROUTER_WRAPPER])

        assert "<Router>\n      <App />\n    </Router>" in result
        assert "Provider" not in result
        assert STORE_LINE not in result

    def test_no_wrappers_root_tag_byte_identical(self, vite_project: Path):
        source = (vite_project / "src" / "main.jsx").read_text(encoding="utf-8")
        result = patch_entry_source(source, [])

        assert result == f"{REACT_IMPORT}\n{source}"

    def test_react_import_not_duplicated(self):
        source = f"{REACT_IMPORT}\n{RENDER_CALL}\n  <App />\n)\n"
        result = patch_entry_source(source, [])
        assert result == source

    def test_import_order(self, vite_project: Path):
        source = (vite_project / "src" / "main.jsx").read_text(encoding="utf-8")
        result = patch_entry_source(source, [REDUX_WRAPPER, ROUTER_WRAPPER])
        lines = result.splitlines()

        assert lines[:5] == [
            ROUTER_IMPORT,
            "import { Provider } from 'react-redux';",
            "import { legacy_createStore } from 'redux';",
            "import Reducer from './store/reducer';",
            REACT_IMPORT,
        ]
        assert lines[5] == "import { StrictMode } from 'react'"

    def test_store_created_before_render(self, vite_project: Path):
        source = (vite_project / "src" / "main.jsx").read_text(encoding="utf-8")
        result = patch_entry_source(source, [REDUX_WRAPPER])

        assert f"{STORE_LINE}\n\n{RENDER_CALL}" in result
        assert result.index(STORE_LINE) < result.index(RENDER_CALL)
        assert result.count(STORE_LINE) == 1

    def test_missing_render_call_with_redux(self):
        source = "ReactDOM.render(<App />, document.getElementById('root'));\n"
        with pytest.raises(EntryPatchError, match="render call site"):
            patch_entry_source(source, [REDUX_WRAPPER])

    def test_missing_render_call_without_redux_is_fine(self):
        source = "ReactDOM.render(<App />, document.getElementById('root'));\n"
        result = patch_entry_source(source, [ROUTER_WRAPPER])
        assert "render(<Router>\n  <App />\n</Router>, document" in result

    def test_every_root_tag_wrapped(self):
        source = f"{RENDER_CALL}\n  <App />\n)\n// <App />\n"
        result = patch_entry_source(source, [ROUTER_WRAPPER])
        assert result.count("<Router>") == 2
        assert result.count(ROOT_TAG) == 2


# ---------------------------------------------------------------------------
# EntryPointPatcher
# ---------------------------------------------------------------------------


class TestEntryPointPatcher:
    @pytest.mark.asyncio
    async def test_patches_file_in_place(self, tools: ToolConfig, vite_project: Path):
        message = await EntryPointPatcher(tools).patch(_config(True, True))

        content = tools.entry_path("demo").read_text(encoding="utf-8")
        assert "<Provider store={store}>" in content
        assert "<Router>" in content
        assert message == "Root wrappers: redux, router"

    @pytest.mark.asyncio
    async def test_no_wrappers_message(self, tools: ToolConfig, vite_project: Path):
        message = await EntryPointPatcher(tools).patch(_config(False, False))
        assert message == "Root wrappers: none"

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tools: ToolConfig):
        with pytest.raises(FileNotFoundError):
            await EntryPointPatcher(tools).patch(_config(True, False))

    @pytest.mark.asyncio
    async def test_failed_patch_leaves_file_untouched(self, tools: ToolConfig, vite_project: Path):
        entry = tools.entry_path("demo")
        entry.write_text("render(<App />)\n", encoding="utf-8")

        with pytest.raises(EntryPatchError):
            await EntryPointPatcher(tools).patch(_config(True, False))

        assert entry.read_text(encoding="utf-8") == "render(<App />)\n"
