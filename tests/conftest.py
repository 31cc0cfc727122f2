"""Shared test fixtures and helpers."""

import pytest

from src.generator import compile_app
from src.generator.compiler.context_binder import bind_contexts
from src.generator.compiler.name_resolver import resolve_names
from src.generator.context import CompilationContext
from src.generator.loader import load_tree
from src.generator.registries.platforms import get_profile
from src.generator.tree import Platform


def make_component(name: str = "App", **fields) -> dict:
    """Create a raw component definition.

    Args:
        name: Component name
        **fields: Any other document fields (children, expressions, style, ...)

    Returns:
        Component definition dict as it appears in a document
    """
    return {"name": name, "type": "Component", **fields}


def make_app(*components: dict, **fields) -> dict:
    """Create a raw app document.

    Args:
        *components: Component definitions (defaults to a single empty ``App``)
        **fields: Top-level document fields (styleFormats, imports, ...)

    Returns:
        App document dict
    """
    return {
        "type": "app",
        "components": list(components) or [make_component()],
        **fields,
    }


def build_context(document: dict, platform: Platform = Platform.WEB) -> CompilationContext:
    """Load a document and run the app-wide stages (names, contexts).

    Fails the test if the document does not load.
    """
    loaded = load_tree(document)
    assert loaded.is_valid, [str(e) for e in loaded.errors]
    ctx = CompilationContext(tree=loaded.tree, platform=platform)
    resolve_names(ctx)
    plan, errors = bind_contexts(loaded.tree)
    ctx.contexts = plan
    ctx.add_errors(errors)
    ctx.freeze()
    return ctx


def compile_ok(document: dict, platform: Platform | str = Platform.WEB, **kwargs) -> dict[str, str]:
    """Compile a document and return its artifacts, failing on any error."""
    result = compile_app(document, platform=platform, **kwargs)
    assert result.ok, [str(e) for e in result.errors]
    return result.artifacts


@pytest.fixture
def web_profile():
    return get_profile(Platform.WEB)


@pytest.fixture
def cross_profile():
    return get_profile(Platform.CROSS_PLATFORM)
