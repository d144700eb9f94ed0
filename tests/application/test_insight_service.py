"""
Test suite for InsightService.

System role: Verification of overview and mind map orchestration
"""

import pytest

from devmind.application.services.insight_service import (
    EMPTY_OVERVIEW,
    FALLBACK_QUESTIONS,
    InsightService,
    build_mindmap_graph,
)
from devmind.boundary.vdb.vector_schemas import VectorMatch
from devmind.core.prompts import MINDMAP_QUERY, OVERVIEW_QUERY
from devmind.core.retriever import Retriever
from devmind.models.insights import MindMapBranch, MindMapStructure
from tests.fakes import FakeCompletionClient


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    """Provide completion client with no canned answer."""
    return FakeCompletionClient()


@pytest.fixture
def insight_service(fake_embedder, fake_store, embedding_cache, completion_client) -> InsightService:
    """Provide InsightService wired to fakes."""
    retriever = Retriever(embedder=fake_embedder, vector_store=fake_store, cache=embedding_cache)
    return InsightService(
        retriever=retriever,
        completion_client=completion_client,
        overview_top_k=20,
        mindmap_top_k=30,
    )


@pytest.fixture
def populated_store(fake_store, pdf_metadata, code_metadata):
    """Provide store with two matches in ws-1."""
    fake_store.matches["ws-1"] = [
        VectorMatch(id="a", score=0.9, metadata=pdf_metadata),
        VectorMatch(id="b", score=0.8, metadata=code_metadata),
    ]
    return fake_store


# ============================================================================
# Overview
# ============================================================================


class TestOverview:
    """Test suite for InsightService.overview."""

    @pytest.mark.asyncio
    async def test_overview_should_return_fixed_response_for_empty_workspace(
        self, insight_service, completion_client
    ) -> None:
        """Should not call the model when the workspace has no chunks."""
        overview = await insight_service.overview("ws-1")

        assert overview == EMPTY_OVERVIEW
        assert completion_client.calls == []

    @pytest.mark.asyncio
    async def test_overview_should_parse_fenced_json(
        self, insight_service, populated_store, completion_client, fake_embedder
    ) -> None:
        """Should validate the model's JSON into the overview schema."""
        completion_client.answer = (
            "```json\n"
            '{"narrative": {"act1": "Notes and code.", "act2": "Optimization.", "act3": "Evaluation."},'
            ' "suggestedQuestions": ["What is the loss?"]}\n'
            "```"
        )

        overview = await insight_service.overview("ws-1")

        assert overview.narrative.act2 == "Optimization."
        assert overview.suggested_questions == ["What is the loss?"]
        assert fake_embedder.embed_calls == [OVERVIEW_QUERY]
        assert populated_store.queries[0][2] == 20
        _, variables = completion_client.calls[0]
        assert "--- [github] acme/trainer/src/train.py (Page L101-L200) ---" in variables["context"]

    @pytest.mark.asyncio
    async def test_overview_should_fall_back_on_unstructured_output(
        self, insight_service, populated_store, completion_client
    ) -> None:
        """Should wrap unparsable output into the fallback overview."""
        completion_client.answer = "The workspace covers optimization. " * 10

        overview = await insight_service.overview("ws-1")

        assert overview.narrative.act1 == completion_client.answer[:200] + "..."
        assert overview.suggested_questions == FALLBACK_QUESTIONS


# ============================================================================
# Mind map
# ============================================================================


class TestMindMap:
    """Test suite for InsightService.mindmap."""

    @pytest.mark.asyncio
    async def test_mindmap_should_return_single_node_for_empty_workspace(self, insight_service) -> None:
        """Should return the 'No sources yet' node and no edges."""
        graph = await insight_service.mindmap("ws-1")

        assert [(n.id, n.label) for n in graph.nodes] == [("central", "No sources yet")]
        assert graph.edges == []

    @pytest.mark.asyncio
    async def test_mindmap_should_build_graph_from_model_output(
        self, insight_service, populated_store, completion_client, fake_embedder
    ) -> None:
        """Should convert the JSON structure into nodes and edges."""
        completion_client.answer = '{"central": "Training", "branches": [{"name": "Math", "children": ["Loss"]}]}'

        graph = await insight_service.mindmap("ws-1")

        assert [n.label for n in graph.nodes] == ["Training", "Math", "Loss"]
        assert fake_embedder.embed_calls == [MINDMAP_QUERY]
        assert populated_store.queries[0][2] == 30
        _, variables = completion_client.calls[0]
        assert "[github] src/train.py: def train(model):" in variables["context"]

    @pytest.mark.asyncio
    async def test_mindmap_should_fall_back_on_invalid_output(
        self, insight_service, populated_store, completion_client
    ) -> None:
        """Should use the fixed fallback structure when output does not parse."""
        completion_client.answer = "I could not produce JSON."

        graph = await insight_service.mindmap("ws-1")

        assert [n.label for n in graph.nodes] == ["Workspace", "Sources", "PDF Documents", "GitHub Repos"]


class TestBuildMindmapGraph:
    """Test suite for build_mindmap_graph."""

    def test_graph_should_link_every_child_to_its_branch(self) -> None:
        """Should produce stable ids and parent-to-child edges."""
        structure = MindMapStructure(
            central="ML",
            branches=[
                MindMapBranch(name="Models", children=["CNN", "RNN"]),
                MindMapBranch(name="Data", children=[]),
            ],
        )

        graph = build_mindmap_graph(structure)

        assert [(n.id, n.type) for n in graph.nodes] == [
            ("central", "central"),
            ("branch-0", "branch"),
            ("child-0-0", "leaf"),
            ("child-0-1", "leaf"),
            ("branch-1", "branch"),
        ]
        assert [(e.id, e.source, e.target) for e in graph.edges] == [
            ("e-central-branch-0", "central", "branch-0"),
            ("e-branch-0-child-0-0", "branch-0", "child-0-0"),
            ("e-branch-0-child-0-1", "branch-0", "child-0-1"),
            ("e-central-branch-1", "central", "branch-1"),
        ]
