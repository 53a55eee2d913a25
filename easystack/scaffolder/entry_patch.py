"""Wiring of ``src/main.jsx``: imports, store creation and root wrappers.

The active features are expressed as an ordered list of :class:`Wrapper`
descriptors, outermost first.  Each wrapper contributes its import lines, an
optional statement that must run before the root is rendered, and the
opening/closing markup placed around ``<App />``.  The whole list is applied
in one pass by :func:`patch_entry_source`, so adding a new wrapper never
needs another round of search-and-replace.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field

from easystack.config import ProjectConfig, ToolConfig
from easystack.utils import console, print_success

REACT_IMPORT = 'import React from "react";'
RENDER_CALL = "createRoot(document.getElementById('root')).render("
ROOT_TAG = "<App />"
INDENT_STEP = "  "


class EntryPatchError(Exception):
    """Raised when the entry file lacks a marker a wrapper depends on."""


@dataclass(frozen=True)
class Wrapper:
    """One element placed around the root component."""

    name: str
    open_tag: str
    close_tag: str
    imports: tuple[str, ...] = field(default_factory=tuple)
    preamble: str = ""


REDUX_WRAPPER = Wrapper(
    name="redux",
    open_tag="<Provider store={store}>",
    close_tag="</Provider>",
    imports=(
        "import { Provider } from 'react-redux';",
        "import { legacy_createStore } from 'redux';",
        "import Reducer from './store/reducer';",
    ),
    preamble="const store = legacy_createStore(Reducer);",
)

ROUTER_WRAPPER = Wrapper(
    name="router",
    open_tag="<Router>",
    close_tag="</Router>",
    imports=("import { BrowserRouter as Router } from 'react-router-dom';",),
)


def wrappers_for(config: ProjectConfig) -> list[Wrapper]:
    """Return the wrappers for *config*, outermost first (Provider outside Router)."""
    wrappers: list[Wrapper] = []
    if config.use_redux:
        wrappers.append(REDUX_WRAPPER)
    if config.use_router:
        wrappers.append(ROUTER_WRAPPER)
    return wrappers


def render_wrapped_root(
    wrappers: list[Wrapper], root_tag: str = ROOT_TAG, indent: str = ""
) -> str:
    """Render *root_tag* nested inside *wrappers*.

    The first line is returned without *indent* because it replaces the tag
    in place; every following line is prefixed with it.

    >>> print(render_wrapped_root([REDUX_WRAPPER, ROUTER_WRAPPER]))
    <Provider store={store}>
      <Router>
        <App />
      </Router>
    </Provider>
    """
    lines = [INDENT_STEP * depth + w.open_tag for depth, w in enumerate(wrappers)]
    lines.append(INDENT_STEP * len(wrappers) + root_tag)
    lines.extend(
        INDENT_STEP * depth + w.close_tag
        for depth, w in reversed(list(enumerate(wrappers)))
    )
    return ("\n" + indent).join(lines)


def _line_indent(text: str, pos: int) -> str:
    """Whitespace before *pos* on its line, or ``""`` if other text precedes it."""
    prefix = text[text.rfind("\n", 0, pos) + 1 : pos]
    return prefix if not prefix.strip() else ""


def patch_entry_source(source: str, wrappers: list[Wrapper]) -> str:
    """Return *source* with the React import, wrapper imports and wrappers applied.

    Resulting import order is inner wrappers first, then outer wrappers, then
    the React import, then the original file.  Every ``<App />`` occurrence
    is wrapped.  With no wrappers only the React import may be added.

    Raises:
        EntryPatchError: If a wrapper has a preamble and the render call site
            is missing.
    """
    text = source
    if REACT_IMPORT not in text:
        text = f"{REACT_IMPORT}\n{text}"

    preambles = [w.preamble for w in wrappers if w.preamble]
    if preambles:
        if RENDER_CALL not in text:
            raise EntryPatchError(f"render call site {RENDER_CALL!r} not found")
        block = "\n".join(preambles)
        text = text.replace(RENDER_CALL, f"{block}\n\n{RENDER_CALL}", 1)

    imports = [line for w in reversed(wrappers) for line in w.imports]
    if imports:
        text = "\n".join(imports) + "\n" + text

    if wrappers:
        text = re.sub(
            re.escape(ROOT_TAG),
            lambda m: render_wrapped_root(wrappers, indent=_line_indent(m.string, m.start())),
            text,
        )
    return text


class EntryPointPatcher:
    """Applies :func:`patch_entry_source` to a project's ``src/main.jsx``."""

    def __init__(self, tools: ToolConfig) -> None:
        self.tools = tools

    async def patch(self, config: ProjectConfig) -> str:
        console.print("\nConfiguring main.jsx...")
        entry_path = self.tools.entry_path(config.project_name)
        wrappers = wrappers_for(config)

        source = await asyncio.to_thread(entry_path.read_text, encoding="utf-8")
        patched = patch_entry_source(source, wrappers)
        await asyncio.to_thread(entry_path.write_text, patched, encoding="utf-8")

        print_success("main.jsx configured.")
        names = ", ".join(w.name for w in wrappers) or "none"
        return f"Root wrappers: {names}"
