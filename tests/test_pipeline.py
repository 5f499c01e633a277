"""
Unit tests for the tree adapter, suspension point collector and
candidate classifier.

Tests demonstrate positive matches, negative matches, and edge cases.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from para_analyzer.classifier import Trigger, attribute, classify, evaluate
from para_analyzer.collector import SuspensionPoint, collect, enclosing_loop
from para_analyzer.context import AnalysisContext, CodeBlock
from para_analyzer.syntax import NodeKind, Span, declaration_identifier, kind_of
from para_analyzer.utils import create_csharp_parser, iter_nodes


SOURCE = """
class Jobs
{
    public Jobs()
    {
        Run(async () =>
        {
            while (true)
            {
                await Step();
            }
        });
    }

    public async Task Drain()
    {
        await First();
        for (var i = 0; i < 3; i++)
        {
            await Next(i);
        }
    }

    public async Task Once()
    {
        await Only();
    }

    public Task Empty()
    {
        return Task.CompletedTask;
    }
}
"""


@pytest.fixture(scope="module")
def ctx():
    parser = create_csharp_parser()
    source_bytes = SOURCE.encode()
    return AnalysisContext(parser.parse(source_bytes), source_bytes)


def block_named(ctx: AnalysisContext, name: str) -> CodeBlock:
    for block in ctx.code_blocks:
        if ctx.text(declaration_identifier(block.declaration)) == name:
            return block
    raise LookupError(name)


def lambda_block(ctx: AnalysisContext) -> CodeBlock:
    return next(b for b in ctx.code_blocks if b.kind is NodeKind.ANONYMOUS_FUNCTION)


# ============================================================================
# Tree adapter
# ============================================================================

class TestSyntax:

    def test_code_blocks_in_document_order(self, ctx):
        kinds = [block.kind for block in ctx.code_blocks]
        assert kinds == [
            NodeKind.CONSTRUCTOR,
            NodeKind.ANONYMOUS_FUNCTION,
            NodeKind.METHOD,
            NodeKind.METHOD,
            NodeKind.METHOD,
        ]

    def test_kind_predicates(self):
        assert {k for k in NodeKind if k.is_repetition} == {
            NodeKind.FOR, NodeKind.FOREACH, NodeKind.WHILE, NodeKind.DO,
        }
        assert NodeKind.ANONYMOUS_FUNCTION.is_function_like
        assert not NodeKind.ANONYMOUS_FUNCTION.is_named_declaration
        assert NodeKind.CONSTRUCTOR.is_named_declaration
        assert not NodeKind.AWAIT.is_function_like

    def test_unknown_types_are_other(self, ctx):
        kinds = {kind_of(node) for node in ctx.iter_nodes()}
        assert NodeKind.OTHER in kinds
        assert NodeKind.AWAIT in kinds

    def test_span_is_one_based(self, ctx):
        identifier = declaration_identifier(block_named(ctx, "Drain").declaration)
        span = Span.of(identifier)

        line = SOURCE.splitlines().index("    public async Task Drain()") + 1
        assert span.line == line
        assert span.col == len("    public async Task ") + 1
        assert str(span) == f"{line}:{span.col}"

    def test_identifier_is_not_return_type(self, ctx):
        block = block_named(ctx, "Empty")
        assert ctx.text(declaration_identifier(block.declaration)) == "Empty"

    def test_local_function_is_not_a_boundary(self):
        parser = create_csharp_parser()
        source = b"class C { async Task M() { async Task H() { await A(); } } }"
        ctx = AnalysisContext(parser.parse(source), source)
        local = next(n for n in ctx.iter_nodes() if n.type == "local_function_statement")

        assert kind_of(local) is NodeKind.OTHER
        assert [block.kind for block in ctx.code_blocks] == [NodeKind.METHOD]
        assert [ctx.text(p.node) for p in collect(ctx.code_blocks[0])] == ["await A()"]

    def test_iter_nodes_prunes_rejected_subtrees(self, ctx):
        constructor = block_named(ctx, "Jobs").declaration
        pruned = list(iter_nodes(constructor, enter=lambda n: n.type != "lambda_expression"))

        assert pruned[0].type == "constructor_declaration"
        assert not any(n.type == "await_expression" for n in pruned)
        assert any(n.type == "await_expression" for n in iter_nodes(constructor))

    def test_text_of_missing_node(self, ctx):
        assert ctx.text(None) == ""


# ============================================================================
# Collector
# ============================================================================

class TestCollector:

    def test_document_order(self, ctx):
        points = collect(block_named(ctx, "Drain"))

        assert [ctx.text(p.node) for p in points] == ["await First()", "await Next(i)"]
        assert [p.index for p in points] == [0, 1]

    def test_loop_recorded(self, ctx):
        first, second = collect(block_named(ctx, "Drain"))

        assert not first.in_loop
        assert second.in_loop
        assert kind_of(second.loop) is NodeKind.FOR

    def test_does_not_enter_nested_lambda(self, ctx):
        assert collect(block_named(ctx, "Jobs")) == []

    def test_lambda_is_own_block(self, ctx):
        points = collect(lambda_block(ctx))

        assert len(points) == 1
        assert kind_of(points[0].loop) is NodeKind.WHILE

    def test_block_without_awaits(self, ctx):
        assert collect(block_named(ctx, "Empty")) == []

    def test_block_without_body(self, ctx):
        method = next(n for n in ctx.iter_nodes() if n.type == "method_declaration")
        assert collect(CodeBlock(declaration=method, body=None, kind=NodeKind.METHOD)) == []

    def test_enclosing_loop_stops_at_boundary(self):
        parser = create_csharp_parser()
        source = b"class C { void M() { while (x) { Run(async () => await A()); } } }"
        tree = parser.parse(source)
        await_node = next(n for n in iter_nodes(tree.root_node) if n.type == "await_expression")

        assert enclosing_loop(await_node) is None


# ============================================================================
# Classifier
# ============================================================================

class TestClassifier:

    def test_classify_counts(self, ctx):
        assert classify([]) is None
        assert classify(collect(block_named(ctx, "Once"))) is None
        assert classify(collect(block_named(ctx, "Drain"))) is Trigger.MULTIPLE
        assert classify(collect(lambda_block(ctx))) is Trigger.SINGLE_IN_LOOP

    def test_multiple_ignores_loop_nesting(self, ctx):
        point = collect(lambda_block(ctx))[0]
        no_loop = SuspensionPoint(node=point.node, index=0, loop=None)

        assert classify([no_loop, no_loop]) is Trigger.MULTIPLE

    def test_only_first_point_drives(self, ctx):
        block = block_named(ctx, "Drain")
        first, second = collect(block)

        assert evaluate(block, second) is None
        result = evaluate(block, first)
        assert result is not None
        assert result.trigger is Trigger.MULTIPLE
        assert ctx.text(result.identifier) == "Drain"

    def test_attribution_crosses_lambda(self, ctx):
        point = collect(lambda_block(ctx))[0]
        declaration = attribute(point.node)

        assert kind_of(declaration) is NodeKind.CONSTRUCTOR
        assert ctx.text(declaration_identifier(declaration)) == "Jobs"

    def test_no_trigger_for_single_await(self, ctx):
        block = block_named(ctx, "Once")
        assert evaluate(block, collect(block)[0]) is None

    def test_attribution_without_declaration(self):
        parser = create_csharp_parser()
        source = b"class C { Func<Task> f = async () => { await A(); await B(); }; }"
        tree = parser.parse(source)
        await_node = next(n for n in iter_nodes(tree.root_node) if n.type == "await_expression")

        assert attribute(await_node) is None
