"""
Shared pytest fixtures for the expression pipeline.

Provides a fresh standard context per test along with the stage objects
built on it, and a helper for writing YAML contexts to disk.
"""

import pytest
import yaml

from mathtree.parser import Context, EvalVisitor, StringVisitor, Tokenizer, TreeBuilder


@pytest.fixture
def context() -> Context:
    """Standard context, fresh for every test."""
    return Context.standard()


@pytest.fixture
def tokenizer(context: Context) -> Tokenizer:
    return Tokenizer(context)


@pytest.fixture
def builder(context: Context) -> TreeBuilder:
    return TreeBuilder(context)


@pytest.fixture
def evaluator(context: Context) -> EvalVisitor:
    return EvalVisitor(context)


@pytest.fixture
def render(context: Context):
    """Render a tree to infix text."""
    def _render(node) -> str:
        return node.accept(StringVisitor(context))
    return _render


@pytest.fixture
def parse(tokenizer: Tokenizer, builder: TreeBuilder):
    """Tokenize and build an expression."""
    def _parse(expression: str):
        return builder.build(tokenizer.tokenize(expression))
    return _parse


@pytest.fixture
def write_context(tmp_path):
    """Write a YAML context file and return its path."""
    def _write(data: dict, name: str = "context.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data))
        return path
    return _write
